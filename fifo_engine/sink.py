"""
Report Sink

The interface the processor reports sales, rejections and the final
per-symbol totals to.
"""

from decimal import Decimal
from typing import Mapping, Protocol

from .models import RealizedGain, RejectedSale


class ReportSink(Protocol):
    """What the processor reports to while it works through a stream."""

    def on_realized_gain(self, gain: RealizedGain) -> None: ...

    def on_rejection(self, rejection: RejectedSale) -> None: ...

    def on_summary(self, totals: Mapping[str, Decimal]) -> None: ...
