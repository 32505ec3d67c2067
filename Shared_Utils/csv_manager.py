import random
from datetime import date, datetime, timedelta
from decimal import Decimal
from pathlib import Path
from typing import List, Optional, Sequence, Union

import pandas as pd

from Config.constants_core import (
    CSV_COLUMNS,
    CSV_DATE_FORMAT,
    DEFAULT_GENERATOR_SYMBOLS,
    GENERATOR_MAX_PRICE,
    GENERATOR_MAX_QUANTITY,
    GENERATOR_MIN_PRICE,
    GENERATOR_SPAN_DAYS,
    GENERATOR_START_DATE,
    PRICE_QUANT,
)
from Shared_Utils.enum import TransactionType
from Shared_Utils.precision import PrecisionUtils
from fifo_engine.models import Transaction


class TransactionParseError(Exception):
    """
    Raised when a transactions file holds a value that cannot be parsed.

    row_number is the 1-based data row, or None when the file as a whole
    cannot be read.
    """

    def __init__(self, row_number: Optional[int], reason: str, source: Optional[str] = None):
        self.row_number = row_number
        self.reason = reason
        self.source = source
        parts = [source] if source else []
        if row_number is not None:
            parts.append(f"row {row_number}")
        where = ", ".join(parts) or "input"
        super().__init__(f"Malformed transaction ({where}): {reason}")


class CsvManager:
    """
    Reads and writes transaction files: date,transactionType,symbol,quantity,price
    """

    def __init__(self, logger_manager, precision_utils: Optional[PrecisionUtils] = None,
                 symbols: Sequence[str] = DEFAULT_GENERATOR_SYMBOLS):
        self.logger = logger_manager.get_logger('fifo_logger')
        self.precision = precision_utils or PrecisionUtils()
        self.symbols = tuple(symbols)

    # =========================================================================
    # PARSING
    # =========================================================================

    def load_transactions(self, file_path: Union[str, Path]) -> List[Transaction]:
        """
        Parse a transactions file into Transaction values, in file order.

        A header row is detected by 'date' in its first cell. Blank rows and
        rows with missing fields are skipped with a warning; anything else
        that does not parse raises TransactionParseError.
        """
        df = self.load_and_clean_csv(file_path)
        source = Path(file_path).name

        transactions = []
        for row_number, row in enumerate(df.itertuples(index=False), start=1):
            fields = ["" if pd.isna(v) else str(v).strip() for v in row]
            if not any(fields):
                continue
            if not all(fields):
                self.logger.warning(f"⚠️  {source} row {row_number}: missing fields, skipped ({','.join(fields)})")
                continue
            transactions.append(self._parse_row(fields, row_number, source))

        self.logger.info(f"📥 Loaded {len(transactions)} transactions from {source}")
        return transactions

    @staticmethod
    def load_and_clean_csv(file_path: Union[str, Path]) -> pd.DataFrame:
        """Raw file as a DataFrame of strings, header row removed."""
        width = len(CSV_COLUMNS)
        try:
            df = pd.read_csv(
                file_path,
                header=None,
                names=list(CSV_COLUMNS),
                index_col=False,
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
                skipinitialspace=True,
                engine="python",
                # Extra fields (trailing commas included) are dropped
                on_bad_lines=lambda fields: fields[:width],
            )
        except pd.errors.EmptyDataError:
            return pd.DataFrame(columns=list(CSV_COLUMNS))
        except pd.errors.ParserError as e:
            raise TransactionParseError(None, f"unreadable CSV: {e}", Path(file_path).name) from e

        # Short rows come back padded with NaN and are skipped by load_transactions
        if not df.empty and "date" in str(df.iloc[0, 0]).lower():
            df = df.iloc[1:]
        return df.reset_index(drop=True)

    def _parse_row(self, fields: List[str], row_number: int, source: str) -> Transaction:
        raw_date, raw_kind, symbol, raw_qty, raw_price = fields[:len(CSV_COLUMNS)]
        try:
            trade_date = datetime.strptime(raw_date, CSV_DATE_FORMAT).date()
            kind = TransactionType.parse(raw_kind)
            quantity = int(raw_qty)
            price = self.precision.parse_decimal(raw_price)
        except ValueError as e:
            raise TransactionParseError(row_number, str(e), source) from e

        if quantity <= 0:
            raise TransactionParseError(row_number, f"quantity must be positive, got {quantity}", source)
        if price < 0:
            raise TransactionParseError(row_number, f"price must be non-negative, got {price}", source)

        return Transaction(date=trade_date, kind=kind, symbol=symbol, quantity=quantity, price=price)

    # =========================================================================
    # GENERATION
    # =========================================================================

    def generate_csv(self, file_path: Union[str, Path], count: int, seed: Optional[int] = None) -> pd.DataFrame:
        """
        Write `count` random transactions, sorted by date, and return them.

        Sells are drawn independently of buys, so a generated file usually
        contains some sells that the processor will reject.
        """
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}")

        rng = random.Random(seed)
        rows = []
        for _ in range(count):
            trade_date = GENERATOR_START_DATE + timedelta(days=rng.randrange(GENERATOR_SPAN_DAYS))
            price = self._random_price(rng)
            rows.append({
                "date": trade_date,
                "transactionType": rng.choice((TransactionType.BUY, TransactionType.SELL)).value,
                "symbol": rng.choice(self.symbols),
                "quantity": rng.randint(1, GENERATOR_MAX_QUANTITY),
                "price": str(price),
            })

        df = pd.DataFrame(rows, columns=list(CSV_COLUMNS))
        if not df.empty:
            df = df.sort_values("date", kind="mergesort").reset_index(drop=True)
            df["date"] = df["date"].map(date.isoformat)

        path = Path(file_path)
        path.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(path, index=False)
        self.logger.info(f"📝 Generated {count} transactions → {path}")
        return df

    @staticmethod
    def _random_price(rng: random.Random) -> Decimal:
        cents_span = int((GENERATOR_MAX_PRICE - GENERATOR_MIN_PRICE) / PRICE_QUANT)
        return GENERATOR_MIN_PRICE + PRICE_QUANT * rng.randint(0, cents_span)
