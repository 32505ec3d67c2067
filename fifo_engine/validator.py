"""
Ledger Validator

Checks a ledger against the transaction stream that produced it.
"""

from collections import defaultdict
from typing import Dict, Iterable, Sequence

from Shared_Utils.logging_manager import LoggerManager
from .ledger import LotLedger
from .models import RejectedSale, Transaction, ValidationResult


class LedgerValidator:
    """
    Validates ledger invariants after a run.

    Checks:
    - open shares per symbol == bought - accepted sells
    - no symbol ends with negative availability
    - no lot holds a non-positive quantity
    - lot dates are non-decreasing front to back (warning only)
    """

    def __init__(self, logger_manager: LoggerManager):
        self.logger = logger_manager.get_logger('fifo_logger')

    def validate(
        self,
        ledger: LotLedger,
        transactions: Iterable[Transaction],
        rejections: Sequence[RejectedSale] = (),
        strict: bool = False
    ) -> ValidationResult:
        """
        Validate a ledger.

        Args:
            ledger: Ledger after processing
            transactions: The full stream that was processed
            rejections: Sells the processor refused
            strict: If True, treat warnings as errors

        Returns:
            ValidationResult with validation details
        """
        result = ValidationResult(is_valid=True)
        expected = self._expected_availability(transactions, rejections)

        symbols = list(expected)
        for symbol in ledger.symbols():
            if symbol not in expected:
                symbols.append(symbol)
        result.symbols_checked = len(symbols)
        result.open_lots = len(ledger)

        for symbol in symbols:
            self._check_availability(ledger, symbol, expected.get(symbol, 0), result)
            self._check_lots(ledger, symbol, result)

        if result.has_errors:
            result.is_valid = False
            self.logger.error(f"❌ Ledger validation FAILED:\n{result}")
        elif result.has_warnings and strict:
            result.is_valid = False
            self.logger.warning(f"⚠️  Ledger validation FAILED (strict mode):\n{result}")
        else:
            self.logger.info(f"✅ Ledger validation PASSED ({result.symbols_checked} symbols)")

        return result

    # =========================================================================
    # VALIDATION CHECKS
    # =========================================================================

    @staticmethod
    def _expected_availability(
        transactions: Iterable[Transaction],
        rejections: Sequence[RejectedSale]
    ) -> Dict[str, int]:
        expected: Dict[str, int] = defaultdict(int)
        for t in transactions:
            expected[t.symbol] += t.quantity if t.is_buy else -t.quantity
        # Rejected sells never touched the ledger
        for r in rejections:
            expected[r.transaction.symbol] += r.transaction.quantity
        return dict(expected)

    @staticmethod
    def _check_availability(ledger: LotLedger, symbol: str, expected: int, result: ValidationResult):
        if expected < 0:
            result.add_error(f"{symbol}: accepted sells exceed buys by {-expected}")
        actual = ledger.total_available(symbol)
        if actual != expected:
            result.add_error(f"{symbol}: ledger holds {actual}, stream implies {expected}")

    @staticmethod
    def _check_lots(ledger: LotLedger, symbol: str, result: ValidationResult):
        lots = ledger.lots(symbol)
        for position, lot in enumerate(lots):
            if lot.quantity <= 0:
                result.add_error(f"{symbol}: lot #{position} has quantity {lot.quantity}")
        for earlier, later in zip(lots, lots[1:]):
            if later.date < earlier.date:
                result.add_warning(f"{symbol}: lot dated {later.date} queued behind {earlier.date}")
