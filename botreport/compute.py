from datetime import datetime, timezone
from decimal import Decimal
from typing import Dict, Iterable, Optional

from botreport.models import OpenPositionRow, ReportBundle, SymbolGainRow
from fifo_engine.ledger import LotLedger
from fifo_engine.models import ProcessingResult, RealizedGain
from fifo_engine.processor import TransactionProcessor


def _open_positions(ledger: LotLedger) -> list:
    rows = []
    for symbol, lots in ledger.snapshot().items():
        rows.append(OpenPositionRow(
            symbol=symbol,
            lots=len(lots),
            shares=sum(lot.quantity for lot in lots),
            cost_basis=sum((lot.notional for lot in lots), Decimal("0")),
            oldest_lot=lots[0].date,
        ))
    return rows


def build_report_bundle(processor: TransactionProcessor,
                        result: ProcessingResult,
                        realized: Iterable[RealizedGain] = (),
                        source_label: str = "stream",
                        as_of: Optional[datetime] = None) -> ReportBundle:
    """
    Assemble everything the renderer needs from a finished run.

    `realized` is optional; when given (e.g. from ConsoleReportSink) the
    per-symbol rows also carry sell counts, shares, proceeds and basis.
    """
    per_symbol: Dict[str, SymbolGainRow] = {
        symbol: SymbolGainRow(symbol=symbol, realized_gain=total)
        for symbol, total in processor.summary().items()
    }

    for r in realized:
        row = per_symbol.get(r.symbol)
        if row is None:
            continue
        row.sells = (row.sells or 0) + 1
        row.shares_sold = (row.shares_sold or 0) + r.quantity
        row.proceeds = (row.proceeds or Decimal("0")) + r.proceeds
        row.cost_basis = (row.cost_basis or Decimal("0")) + r.cost_basis

    as_of = as_of or datetime.now(timezone.utc)
    return ReportBundle(
        as_of_iso=as_of.replace(microsecond=0).isoformat(),
        source_label=source_label,
        gains=list(per_symbol.values()),
        total_gain=result.total_gain,
        open_positions=_open_positions(processor.ledger),
        rejections=list(result.rejections),
    )
