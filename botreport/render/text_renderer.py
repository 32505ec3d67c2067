from typing import Any, Iterable, List, Optional, Sequence

from botreport.models import ReportBundle
from Shared_Utils.precision import PrecisionUtils


def _limit(s: Any, n: int = 28) -> str:
    s = str(s)
    return s if len(s) <= n else (s[: n - 1] + "…")


class TextRenderer:
    """Plain-text capital gains report."""

    def __init__(self, precision_utils: Optional[PrecisionUtils] = None):
        self.precision = precision_utils or PrecisionUtils()

    def _money(self, x, signed: bool = False) -> str:
        return "n/a" if x is None else self.precision.format_money(x, signed=signed)

    def render(self, b: ReportBundle) -> str:
        lines = []
        lines.append("Capital Gains Report (FIFO)")
        lines.append(f"As of: {b.as_of_iso} · Source: {b.source_label}")
        lines.append("")

        lines.append("Realized Gain/Loss by Symbol")
        if not b.gains:
            lines.append("  • No sales realized.")
        else:
            rows = [
                (
                    g.symbol,
                    "" if g.sells is None else g.sells,
                    "" if g.shares_sold is None else g.shares_sold,
                    "" if g.proceeds is None else self._money(g.proceeds),
                    "" if g.cost_basis is None else self._money(g.cost_basis),
                    self._money(g.realized_gain, signed=True),
                )
                for g in b.gains
            ]
            lines.append(self._table(["Symbol", "Sells", "Shares", "Proceeds", "Cost Basis", "Gain/Loss"], rows))
        lines.append(f" {'Total realized':<24}| {self._money(b.total_gain, signed=True)}")

        lines.append("")
        lines.append("Open Lots")
        if not b.open_positions:
            lines.append("  • No open lots.")
        else:
            rows = [
                (p.symbol, p.lots, p.shares, self._money(p.avg_price), self._money(p.cost_basis), p.oldest_lot.isoformat())
                for p in b.open_positions
            ]
            lines.append(self._table(["Symbol", "Lots", "Shares", "Avg Price", "Cost Basis", "Oldest Lot"], rows))

        if b.rejections:
            lines.append("")
            lines.append(f"Rejected Sales ({len(b.rejections)})")
            for r in b.rejections:
                t = r.transaction
                lines.append(
                    f"  • {t.date.isoformat()} SELL {t.symbol} {r.requested} "
                    f"@ {self._money(t.price)}: only {r.available} held"
                )

        if b.notes:
            lines.append("")
            lines.append(b.notes.strip())

        return "\n".join(lines)

    def _table(self, headers: Sequence[str], rows: Iterable[Sequence[Any]], max_col_width: int = 28, pad: int = 1) -> str:
        """Render a simple ASCII table."""
        cols = len(headers)
        widths = [len(str(h)) for h in headers]
        material: List[List[str]] = []

        for r in rows:
            rr = ["" if c is None else str(c) for c in r]
            material.append(rr)
            for i, c in enumerate(rr):
                widths[i] = max(widths[i], len(_limit(c, max_col_width)))

        widths = [min(w, max_col_width) for w in widths]

        def fmt_row(vals: Sequence[Any]) -> str:
            cells = []
            for i, v in enumerate(vals):
                cells.append(_limit(v, widths[i]).ljust(widths[i]))
            return ((" " * pad) + " | ".join(cells)).rstrip()

        def sep(char: str = "-") -> str:
            total = sum(widths) + (cols - 1) * 3 + pad * 2
            return char * total

        out = [fmt_row(headers), sep()]
        for rr in material:
            out.append(fmt_row(rr))
        return "\n".join(out)
