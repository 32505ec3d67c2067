"""
Transaction Processor

Routes each transaction of a stream to the ledger (BUY) or the matching
engine (SELL), records realized gains, and reports as it goes.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Dict, Iterable, Mapping, Optional

from Shared_Utils.logging_manager import LoggerManager
from .aggregator import GainAggregator
from .engine import FifoMatchingEngine
from .exceptions import InsufficientShares, LedgerConsistencyError
from .ledger import LotLedger
from .models import ProcessingResult, RealizedGain, RejectedSale, Transaction
from .sink import ReportSink


class TransactionProcessor:
    """
    Orchestrates BUY/SELL handling across a stream of transactions.

    Owns one ledger and one aggregator for its whole life. Transactions must
    arrive in chronological order per symbol; out-of-order input is logged
    but not corrected.

    Usage:
        processor = TransactionProcessor(logger_manager, report_sink=sink)
        result = processor.process_all(transactions)
        totals = processor.summary()
    """

    def __init__(self, logger_manager: LoggerManager, report_sink: Optional[ReportSink] = None):
        """
        Initialize the processor.

        Args:
            logger_manager: Logging manager
            report_sink: Optional receiver for per-sale, rejection and summary events
        """
        self.logger = logger_manager.get_logger('fifo_logger')
        self.report_sink = report_sink

        self.ledger = LotLedger()
        self.aggregator = GainAggregator()
        self.engine = FifoMatchingEngine(self.ledger, logger_manager)

        self._last_seen: Dict[str, date] = {}

    def process(self, transaction: Transaction) -> Optional[RealizedGain]:
        """
        Apply a single transaction.

        Returns:
            RealizedGain for a SELL, None for a BUY

        Raises:
            InsufficientShares: SELL exceeds open shares; nothing was applied
            LedgerConsistencyError: ledger bookkeeping fault
        """
        self._check_order(transaction)

        if transaction.is_buy:
            self.ledger.add_lot(transaction.symbol, transaction)
            self.logger.buy(
                f"{transaction.symbol}: +{transaction.quantity} @ ${transaction.price} "
                f"(open: {self.ledger.total_available(transaction.symbol)})"
            )
            return None

        if transaction.is_sell:
            self.logger.sell(
                f"{transaction.symbol}: -{transaction.quantity} @ ${transaction.price} "
                f"(open: {self.ledger.total_available(transaction.symbol)})"
            )
            realized = self.engine.realize(transaction)
            running = self.aggregator.record(realized.symbol, realized.gain)
            self.logger.realized_gain(
                f"{realized.symbol}: sold {realized.quantity} @ ${realized.sell_price} "
                f"→ gain/loss ${realized.gain} (running: ${running})"
            )
            if self.report_sink is not None:
                self.report_sink.on_realized_gain(realized)
            return realized

        raise ValueError(f"Unsupported transaction kind: {transaction.kind!r}")

    def process_all(self, transactions: Iterable[Transaction]) -> ProcessingResult:
        """
        Apply every transaction in the given order.

        Rejected sells are logged, reported and skipped. Ledger consistency
        faults propagate and stop the run.
        """
        start_time = datetime.now(timezone.utc)
        result = ProcessingResult()
        symbols: Dict[str, None] = {}  # insertion-ordered set

        self.logger.info("🚀 Processing transaction stream")

        for transaction in transactions:
            symbols.setdefault(transaction.symbol)

            try:
                realized = self.process(transaction)
            except InsufficientShares as e:
                rejection = RejectedSale(
                    transaction=transaction,
                    available=e.available,
                    requested=e.requested,
                    reason=str(e),
                )
                result.sells_rejected += 1
                result.rejections.append(rejection)
                self.logger.insufficient_shares(f"⚠️  Rejected {transaction}: {e}")
                if self.report_sink is not None:
                    self.report_sink.on_rejection(rejection)
                continue
            except LedgerConsistencyError as e:
                self.logger.error(f"❌ Ledger consistency fault on {transaction}: {e}", exc_info=True)
                raise

            if realized is None:
                result.buys_processed += 1
            else:
                result.sells_processed += 1

        result.symbols_processed = list(symbols)
        result.total_gain = self.aggregator.total()
        result.duration_ms = int((datetime.now(timezone.utc) - start_time).total_seconds() * 1000)

        totals = self.summary()
        if self.report_sink is not None:
            self.report_sink.on_summary(totals)

        self.logger.info(
            f"🎉 Stream complete!\n"
            f"   Symbols: {len(symbols)}\n"
            f"   Buys: {result.buys_processed}\n"
            f"   Sells: {result.sells_processed} (rejected: {result.sells_rejected})\n"
            f"   Total gain/loss: ${result.total_gain:,.2f}\n"
            f"   Duration: {result.duration_ms:,}ms"
        )
        return result

    def summary(self) -> Mapping[str, Decimal]:
        """Per-symbol realized totals, in the order symbols first realized a gain."""
        return self.aggregator.snapshot()

    def _check_order(self, transaction: Transaction) -> None:
        last = self._last_seen.get(transaction.symbol)
        if last is not None and transaction.date < last:
            self.logger.warning(
                f"⚠️  {transaction.symbol}: {transaction.date} arrives after {last}; "
                f"FIFO order follows input order"
            )
        else:
            self._last_seen[transaction.symbol] = transaction.date
