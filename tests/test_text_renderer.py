"""
Tests for the capital gains report: per-sale console lines, bundle assembly
and the plain-text renderer.
"""

import io
from datetime import date, datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from botreport.compute import build_report_bundle
from botreport.models import OpenPositionRow, ReportBundle, SymbolGainRow
from botreport.render.text_renderer import TextRenderer
from botreport.sink import ConsoleReportSink
from fifo_engine import Transaction, TransactionProcessor
from Shared_Utils.enum import TransactionType
from Shared_Utils.precision import PrecisionUtils

AS_OF = datetime(2025, 4, 1, 12, 0, 0, tzinfo=timezone.utc)


def trade(kind, symbol, quantity, price, on):
    return Transaction(date.fromisoformat(on), kind, symbol, quantity, Decimal(price))


@pytest.fixture
def stream():
    return [
        trade(TransactionType.BUY, "AAPL", 100, "150.00", "2025-01-01"),
        trade(TransactionType.BUY, "AAPL", 50, "155.00", "2025-02-01"),
        trade(TransactionType.BUY, "MSFT", 10, "100.00", "2025-02-03"),
        trade(TransactionType.SELL, "GOOG", 5, "90.00", "2025-02-15"),
        trade(TransactionType.SELL, "AAPL", 120, "160.00", "2025-03-01"),
        trade(TransactionType.SELL, "MSFT", 10, "90.00", "2025-03-02"),
    ]


@pytest.fixture
def run(stream):
    manager = MagicMock()
    out = io.StringIO()
    sink = ConsoleReportSink(stream=out)
    processor = TransactionProcessor(manager, report_sink=sink)
    result = processor.process_all(stream)
    return processor, result, sink, out


class TestPrecisionUtils:

    @pytest.mark.parametrize("value, signed, expected", [
        (Decimal("1100"), False, "$1,100.00"),
        (Decimal("1100"), True, "+$1,100.00"),
        (Decimal("-100"), True, "-$100.00"),
        (Decimal("-0.004"), True, "$0.00"),
        (Decimal("0.125"), False, "$0.12"),
        (Decimal("0.135"), False, "$0.14"),
    ])
    def test_format_money(self, value, signed, expected):
        assert PrecisionUtils().format_money(value, signed=signed) == expected

    def test_parse_decimal_is_strict(self):
        assert PrecisionUtils.parse_decimal(" 155.00 ") == Decimal("155.00")
        for raw in ("abc", "", "NaN", "Infinity"):
            with pytest.raises(ValueError):
                PrecisionUtils.parse_decimal(raw)

    def test_safe_decimal_falls_back(self):
        assert PrecisionUtils.safe_decimal("oops") == Decimal("0")
        assert PrecisionUtils.safe_decimal(3) == Decimal("3")

    def test_quant_from_places(self):
        assert PrecisionUtils.quant_from_places(4) == Decimal("0.0001")
        with pytest.raises(ValueError):
            PrecisionUtils.quant_from_places(-1)


class TestConsoleReportSink:

    def test_prints_one_line_per_sale_and_rejection(self, run):
        _, _, sink, out = run

        lines = out.getvalue().splitlines()
        assert lines == [
            "Rejected sale of 5 shares of GOOG on 2025-02-15: only 0 available",
            "Capital gain/loss for selling 120 shares of AAPL: $1,100.00",
            "Capital gain/loss for selling 10 shares of MSFT: -$100.00",
        ]
        assert len(sink.realized) == 2
        assert len(sink.rejections) == 1
        assert dict(sink.totals) == {"AAPL": Decimal("1100.00"), "MSFT": Decimal("-100.00")}

    def test_quiet_sink_still_collects(self):
        out = io.StringIO()
        sink = ConsoleReportSink(stream=out, echo=False)
        sink.on_summary({"AAPL": Decimal("1")})

        assert out.getvalue() == ""
        assert sink.totals == {"AAPL": Decimal("1")}


class TestBuildReportBundle:

    def test_bundle_from_run(self, run):
        processor, result, sink, _ = run

        bundle = build_report_bundle(processor, result, sink.realized, source_label="trades.csv", as_of=AS_OF)

        assert bundle.as_of_iso == "2025-04-01T12:00:00+00:00"
        assert [g.symbol for g in bundle.gains] == ["AAPL", "MSFT"]
        aapl = bundle.gains[0]
        assert (aapl.sells, aapl.shares_sold) == (1, 120)
        assert aapl.proceeds == Decimal("19200.00")
        assert aapl.cost_basis == Decimal("18100.00")
        assert bundle.total_gain == Decimal("1000.00")

        assert len(bundle.open_positions) == 1
        position = bundle.open_positions[0]
        assert (position.symbol, position.lots, position.shares) == ("AAPL", 1, 30)
        assert position.avg_price == Decimal("155.00")
        assert position.oldest_lot == date(2025, 2, 1)
        assert len(bundle.rejections) == 1

    def test_bundle_without_realized_details(self, run):
        processor, result, _, _ = run

        bundle = build_report_bundle(processor, result, as_of=AS_OF)

        assert bundle.gains[0].sells is None
        assert bundle.gains[0].realized_gain == Decimal("1100.00")


class TestTextRenderer:

    def test_full_report(self, run):
        processor, result, sink, _ = run
        bundle = build_report_bundle(processor, result, sink.realized, source_label="trades.csv", as_of=AS_OF)

        text = TextRenderer().render(bundle)

        assert text.startswith("Capital Gains Report (FIFO)")
        assert "Source: trades.csv" in text
        assert "+$1,100.00" in text
        assert "-$100.00" in text
        assert " Total realized          | +$1,000.00" in text
        assert "$155.00" in text
        assert "Rejected Sales (1)" in text
        assert "  • 2025-02-15 SELL GOOG 5 @ $90.00: only 0 held" in text

    def test_empty_report(self):
        bundle = ReportBundle(as_of_iso="2025-04-01T00:00:00+00:00", source_label="empty.csv")

        text = TextRenderer().render(bundle)

        assert "  • No sales realized." in text
        assert "  • No open lots." in text
        assert "$0.00" in text
        assert "Rejected Sales" not in text

    def test_display_places(self):
        bundle = ReportBundle(
            as_of_iso="x", source_label="y",
            gains=[SymbolGainRow(symbol="AAPL", realized_gain=Decimal("1.23456"))],
            total_gain=Decimal("1.23456"),
            open_positions=[OpenPositionRow("AAPL", 1, 3, Decimal("10"), date(2025, 1, 1))],
        )

        text = TextRenderer(PrecisionUtils(display_places=4)).render(bundle)

        assert "+$1.2346" in text
        assert "$3.3333" in text

    def test_long_values_truncated_in_table(self):
        renderer = TextRenderer()
        table = renderer._table(["Symbol"], [("X" * 40,)])

        row = table.splitlines()[2]
        assert row.strip().endswith("…")
        assert len(row.strip()) == 28
