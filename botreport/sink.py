import sys
from decimal import Decimal
from typing import List, Mapping, Optional, TextIO

from fifo_engine.models import RealizedGain, RejectedSale
from Shared_Utils.precision import PrecisionUtils


class ConsoleReportSink:
    """
    Prints one line per realized sale and per rejection as the stream is
    processed, and keeps everything it saw for the end-of-run report.
    """

    def __init__(self, precision_utils: Optional[PrecisionUtils] = None, stream: Optional[TextIO] = None,
                 echo: bool = True):
        self.precision = precision_utils or PrecisionUtils()
        self.stream = stream
        self.echo = echo
        self.realized: List[RealizedGain] = []
        self.rejections: List[RejectedSale] = []
        self.totals: Mapping[str, Decimal] = {}

    def _write(self, line: str):
        if self.echo:
            print(line, file=self.stream or sys.stdout)

    def on_realized_gain(self, gain: RealizedGain) -> None:
        self.realized.append(gain)
        self._write(
            f"Capital gain/loss for selling {gain.quantity} shares of {gain.symbol}: "
            f"{self.precision.format_money(gain.gain)}"
        )

    def on_rejection(self, rejection: RejectedSale) -> None:
        self.rejections.append(rejection)
        t = rejection.transaction
        self._write(
            f"Rejected sale of {rejection.requested} shares of {t.symbol} on {t.date.isoformat()}: "
            f"only {rejection.available} available"
        )

    def on_summary(self, totals: Mapping[str, Decimal]) -> None:
        self.totals = totals
