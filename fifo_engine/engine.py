"""
FIFO Matching Engine

Realizes a SELL against a symbol's lot ledger, oldest lots first.
"""

from decimal import Decimal
from typing import List

from Shared_Utils.logging_manager import LoggerManager
from .exceptions import InsufficientShares, LedgerExhausted
from .ledger import LotLedger
from .models import LotMatch, RealizedGain, Transaction


class FifoMatchingEngine:
    """
    Matches sales against open lots and computes realized gain/loss.

    The engine only touches ledger state. Recording the gain is the
    caller's job.

    Usage:
        engine = FifoMatchingEngine(ledger, logger_manager)
        result = engine.realize(sell)
    """

    def __init__(self, ledger: LotLedger, logger_manager: LoggerManager):
        """
        Initialize the matching engine.

        Args:
            ledger: Ledger the engine consumes lots from
            logger_manager: Logging manager
        """
        self.ledger = ledger
        self.logger = logger_manager.get_logger('fifo_logger')

    def realize(self, sell: Transaction) -> RealizedGain:
        """
        Match a SELL against the oldest open lots of its symbol.

        Args:
            sell: SELL transaction

        Returns:
            RealizedGain with proceeds, cost basis and the per-lot matches

        Raises:
            InsufficientShares: ledger holds fewer shares than requested (ledger untouched)
            LedgerExhausted: ledger ran dry after the availability check passed
        """
        if not sell.is_sell:
            raise ValueError(f"realize() expects a SELL transaction, got {sell.kind.value}")

        symbol = sell.symbol
        available = self.ledger.total_available(symbol)
        if available < sell.quantity:
            raise InsufficientShares(symbol, available, sell.quantity)

        matches = self._consume_lots(sell)
        cost_basis = sum((m.cost for m in matches), Decimal("0"))
        proceeds = sell.price * sell.quantity
        gain = proceeds - cost_basis

        self.logger.debug(
            f"   {symbol}: sold {sell.quantity} across {len(matches)} lot(s), "
            f"basis={cost_basis} proceeds={proceeds} → {gain}"
        )

        return RealizedGain(
            symbol=symbol,
            quantity=sell.quantity,
            sell_date=sell.date,
            sell_price=sell.price,
            proceeds=proceeds,
            cost_basis=cost_basis,
            gain=gain,
            matches=tuple(matches),
        )

    # =========================================================================
    # FIFO MATCHING ALGORITHM
    # =========================================================================

    def _consume_lots(self, sell: Transaction) -> List[LotMatch]:
        """Consume lots front to back until the sale is covered."""
        symbol = sell.symbol
        remaining = sell.quantity
        matches: List[LotMatch] = []

        while remaining > 0:
            lot = self.ledger.peek_oldest(symbol)
            if lot is None:
                cost_so_far = sum((m.cost for m in matches), Decimal("0"))
                self.logger.error(
                    f"❌ Ledger for {symbol} exhausted with {remaining} shares unmatched"
                )
                raise LedgerExhausted(symbol, remaining, cost_so_far)

            if lot.quantity <= remaining:
                # Whole lot consumed; an exact match never leaves a zero remainder
                matches.append(LotMatch(lot_date=lot.date, quantity=lot.quantity, price=lot.price))
                remaining -= lot.quantity
                self.ledger.remove_oldest(symbol)
            else:
                matches.append(LotMatch(lot_date=lot.date, quantity=remaining, price=lot.price))
                self.ledger.replace_front(symbol, lot.with_quantity(lot.quantity - remaining))
                remaining = 0

        return matches
