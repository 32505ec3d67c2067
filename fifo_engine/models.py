"""
Data models for the FIFO capital gains engine.

Transactions (and the lots built from them) are immutable values. Everything
else here is a result record handed from the engine to the processor and on to
reporting.
"""

from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from typing import List, Optional, Tuple

from Shared_Utils.enum import TransactionType


@dataclass(frozen=True)
class Transaction:
    """
    One trade event: BUY or SELL of `quantity` shares of `symbol` at `price`.

    A BUY held in a ledger is a lot. Partial consumption never mutates a lot;
    `with_quantity` builds its replacement.
    """

    date: date
    kind: TransactionType
    symbol: str
    quantity: int
    price: Decimal

    @property
    def is_buy(self) -> bool:
        return self.kind is TransactionType.BUY

    @property
    def is_sell(self) -> bool:
        return self.kind is TransactionType.SELL

    @property
    def notional(self) -> Decimal:
        """quantity * price"""
        return self.price * self.quantity

    def with_quantity(self, quantity: int) -> "Transaction":
        """Copy of this transaction with a different share count (same date, kind and price)."""
        return replace(self, quantity=quantity)

    def __str__(self) -> str:
        return (
            f"Transaction[date={self.date.isoformat()}, type={self.kind.value}, "
            f"symbol={self.symbol}, quantity={self.quantity}, price={self.price:.2f}]"
        )


# A lot is a BUY transaction sitting in a ledger.
Lot = Transaction


@dataclass(frozen=True)
class LotMatch:
    """How much of a single lot was consumed by a sale."""

    lot_date: date
    quantity: int
    price: Decimal

    @property
    def cost(self) -> Decimal:
        return self.price * self.quantity


@dataclass(frozen=True)
class RealizedGain:
    """
    Outcome of matching one SELL against its ledger.

    gain = proceeds - cost_basis, unrounded.
    """

    symbol: str
    quantity: int
    sell_date: date
    sell_price: Decimal
    proceeds: Decimal
    cost_basis: Decimal
    gain: Decimal
    matches: Tuple[LotMatch, ...] = ()

    @property
    def is_loss(self) -> bool:
        return self.gain < 0

    def __str__(self) -> str:
        return (
            f"RealizedGain({self.symbol}: {self.quantity} @ ${self.sell_price} "
            f"→ basis ${self.cost_basis}, PnL ${self.gain})"
        )


@dataclass(frozen=True)
class RejectedSale:
    """A SELL that was refused because the ledger did not hold enough shares."""

    transaction: Transaction
    available: int
    requested: int
    reason: str


@dataclass
class ProcessingResult:
    """
    Result of running a whole transaction stream through the processor.

    Contains statistics and timing.
    """

    buys_processed: int = 0
    sells_processed: int = 0
    sells_rejected: int = 0
    symbols_processed: List[str] = field(default_factory=list)
    total_gain: Decimal = Decimal("0")
    rejections: List[RejectedSale] = field(default_factory=list)
    duration_ms: Optional[int] = None

    @property
    def transactions_processed(self) -> int:
        return self.buys_processed + self.sells_processed + self.sells_rejected

    @property
    def has_rejections(self) -> bool:
        return self.sells_rejected > 0

    def __str__(self) -> str:
        status = "⚠️" if self.has_rejections else "✅"
        return (
            f"ProcessingResult({status} {self.transactions_processed} transactions: "
            f"{self.buys_processed} buys, {self.sells_processed} sells, "
            f"{self.sells_rejected} rejected, "
            f"PnL: ${self.total_gain:,.2f}, {self.duration_ms or 0}ms)"
        )


@dataclass
class ValidationResult:
    """
    Result of checking a ledger against the stream that produced it.
    """

    is_valid: bool

    symbols_checked: int = 0
    open_lots: int = 0

    error_messages: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Check if validation found errors."""
        return not self.is_valid or len(self.error_messages) > 0

    @property
    def has_warnings(self) -> bool:
        """Check if validation found warnings."""
        return len(self.warnings) > 0

    def add_error(self, message: str):
        """Add an error message."""
        self.error_messages.append(message)
        self.is_valid = False

    def add_warning(self, message: str):
        """Add a warning message."""
        self.warnings.append(message)

    def __str__(self) -> str:
        status = "✅ VALID" if self.is_valid else "❌ INVALID"

        parts = [
            f"ValidationResult({status})",
            f"  Symbols: {self.symbols_checked}",
            f"  Open lots: {self.open_lots}",
        ]

        if self.has_errors:
            parts.append(f"  ❌ Errors: {len(self.error_messages)}")
            for err in self.error_messages[:3]:  # Show first 3
                parts.append(f"    - {err}")

        if self.has_warnings:
            parts.append(f"  ⚠️  Warnings: {len(self.warnings)}")
            for warn in self.warnings[:3]:  # Show first 3
                parts.append(f"    - {warn}")

        return "\n".join(parts)
