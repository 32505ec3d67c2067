"""
Gain Aggregator

Running realized gain/loss per symbol for one processing run.
"""

from decimal import Decimal
from types import MappingProxyType
from typing import Dict, Mapping


class GainAggregator:
    """Running realized gain/loss per symbol, in first-recorded order."""

    def __init__(self):
        self._totals: Dict[str, Decimal] = {}

    def record(self, symbol: str, amount: Decimal) -> Decimal:
        """Add `amount` to the symbol's total and return the new total."""
        total = self._totals.get(symbol, Decimal("0")) + amount
        self._totals[symbol] = total
        return total

    def snapshot(self) -> Mapping[str, Decimal]:
        return MappingProxyType(dict(self._totals))

    def total(self) -> Decimal:
        return sum(self._totals.values(), Decimal("0"))

    def __contains__(self, symbol) -> bool:
        return symbol in self._totals

    def __len__(self) -> int:
        return len(self._totals)
