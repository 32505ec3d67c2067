"""
Lot Ledger

Per-symbol FIFO queues of open BUY lots. All lot mutation goes through here.
"""

from collections import deque
from types import MappingProxyType
from typing import Deque, Dict, Iterator, Mapping, Optional, Tuple

from .exceptions import EmptyLedger
from .models import Lot


class LotLedger:
    """
    Open lots keyed by symbol, oldest first.

    Invariants:
    - every held lot has quantity > 0
    - a symbol with no open lots has no entry
    """

    def __init__(self):
        self._lots: Dict[str, Deque[Lot]] = {}

    def add_lot(self, symbol: str, lot: Lot) -> None:
        """Append a lot to the back of the symbol's queue."""
        self._lots.setdefault(symbol, deque()).append(lot)

    def peek_oldest(self, symbol: str) -> Optional[Lot]:
        queue = self._lots.get(symbol)
        return queue[0] if queue else None

    def remove_oldest(self, symbol: str) -> Lot:
        """Pop and return the front lot. Raises EmptyLedger if there is none."""
        queue = self._lots.get(symbol)
        if not queue:
            raise EmptyLedger(symbol, "remove_oldest")
        lot = queue.popleft()
        if not queue:
            del self._lots[symbol]
        return lot

    def replace_front(self, symbol: str, new_lot: Lot) -> Lot:
        """
        Swap the front lot for `new_lot` in one step and return the old one.

        The replacement keeps front position, so a partially consumed lot is
        still matched before anything bought after it.
        """
        queue = self._lots.get(symbol)
        if not queue:
            raise EmptyLedger(symbol, "replace_front")
        if new_lot.quantity <= 0:
            raise ValueError(f"replacement lot for {symbol} must have positive quantity, got {new_lot.quantity}")
        old = queue[0]
        queue[0] = new_lot
        return old

    def total_available(self, symbol: str) -> int:
        return sum(lot.quantity for lot in self._lots.get(symbol, ()))

    def is_empty(self, symbol: str) -> bool:
        return symbol not in self._lots

    def lots(self, symbol: str) -> Tuple[Lot, ...]:
        return tuple(self._lots.get(symbol, ()))

    def symbols(self) -> Tuple[str, ...]:
        return tuple(self._lots)

    def snapshot(self) -> Mapping[str, Tuple[Lot, ...]]:
        """Read-only copy of every open queue."""
        return MappingProxyType({symbol: tuple(queue) for symbol, queue in self._lots.items()})

    def __iter__(self) -> Iterator[str]:
        return iter(self.symbols())

    def __len__(self) -> int:
        return sum(len(queue) for queue in self._lots.values())

    def __repr__(self) -> str:
        held = ", ".join(f"{s}={self.total_available(s)}" for s in self._lots)
        return f"LotLedger({held})"
