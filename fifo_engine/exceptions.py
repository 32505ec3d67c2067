# fifo_engine/exceptions.py
"""
Exceptions raised by the FIFO engine.

Two families:
- InsufficientShares is a data error. The offending SELL is rejected and the
  stream continues.
- LedgerConsistencyError (EmptyLedger, LedgerExhausted) means the ledger
  bookkeeping is broken. The processor logs them and re-raises.
"""

from decimal import Decimal
from typing import Optional


class FifoEngineError(Exception):
    """Base exception for all FIFO engine errors."""
    pass


class InsufficientShares(FifoEngineError):
    """Raised when a SELL requests more shares than the ledger holds."""

    def __init__(self, symbol: str, available: int, requested: int):
        self.symbol = symbol
        self.available = available
        self.requested = requested
        super().__init__(
            f"Insufficient shares for {symbol}: available={available}, requested={requested}"
        )


class LedgerConsistencyError(FifoEngineError):
    """Base exception for internal ledger bookkeeping faults."""
    pass


class EmptyLedger(LedgerConsistencyError):
    """Raised when the front of an empty ledger is removed or replaced."""

    def __init__(self, symbol: str, operation: str):
        self.symbol = symbol
        self.operation = operation
        super().__init__(f"{operation}: no open lots for {symbol}")


class LedgerExhausted(LedgerConsistencyError):
    """Raised when the ledger runs dry in the middle of matching a SELL."""

    def __init__(self, symbol: str, remaining: int, cost_basis: Optional[Decimal] = None):
        self.symbol = symbol
        self.remaining = remaining
        self.cost_basis = cost_basis
        super().__init__(
            f"Ledger for {symbol} exhausted with {remaining} shares still unmatched "
            f"(availability check passed, bookkeeping is inconsistent)"
        )
