# botreport/models.py
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List, Optional

from fifo_engine.models import RejectedSale


@dataclass
class SymbolGainRow:
    symbol: str
    realized_gain: Decimal
    sells: Optional[int] = None
    shares_sold: Optional[int] = None
    proceeds: Optional[Decimal] = None
    cost_basis: Optional[Decimal] = None


@dataclass
class OpenPositionRow:
    symbol: str
    lots: int
    shares: int
    cost_basis: Decimal
    oldest_lot: date

    @property
    def avg_price(self) -> Decimal:
        return self.cost_basis / self.shares if self.shares else Decimal("0")


@dataclass
class ReportBundle:
    """Hand-off struct from compute to renderer."""
    as_of_iso: str
    source_label: str
    gains: List[SymbolGainRow] = field(default_factory=list)
    total_gain: Decimal = Decimal("0")
    open_positions: List[OpenPositionRow] = field(default_factory=list)
    rejections: List[RejectedSale] = field(default_factory=list)
    notes: str = ""
