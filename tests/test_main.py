"""
End-to-end runs of the command line entry points.
"""

import pytest

import main as cli
from fifo_engine import LedgerExhausted
from scripts import generate_transactions

TRADES = (
    "date,transactionType,symbol,quantity,price\n"
    "2025-01-01,BUY,AAPL,100,150.00\n"
    "2025-02-01,BUY,AAPL,50,155.00\n"
    "2025-03-01,SELL,AAPL,120,160.00\n"
    "2025-03-02,SELL,MSFT,10,90.00\n"
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for key in ("GAINS_LOG_LEVEL", "GAINS_DISPLAY_PLACES", "GAINS_INPUT_CSV", "GAINS_GENERATOR_SYMBOLS"):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("GAINS_LOG_TO_FILE", "false")
    monkeypatch.setenv("GAINS_LOG_DIR", str(tmp_path / "logs"))


@pytest.fixture
def trades_csv(tmp_path):
    path = tmp_path / "trades.csv"
    path.write_text(TRADES, encoding="utf-8")
    return path


class TestMain:

    def test_reference_run(self, trades_csv, capsys):
        code = cli.main(["--input", str(trades_csv), "--no-color"])

        out = capsys.readouterr().out
        assert code == cli.EXIT_OK
        assert "Capital gain/loss for selling 120 shares of AAPL: $1,100.00" in out
        assert "Rejected sale of 10 shares of MSFT on 2025-03-02: only 0 available" in out
        assert "Capital Gains Report (FIFO)" in out
        assert "+$1,100.00" in out

    def test_input_from_environment(self, trades_csv, monkeypatch, capsys):
        monkeypatch.setenv("GAINS_INPUT_CSV", str(trades_csv))

        assert cli.main(["--quiet-sales", "--no-color"]) == cli.EXIT_OK

        out = capsys.readouterr().out
        assert "Capital gain/loss for selling" not in out
        assert "Capital Gains Report (FIFO)" in out

    def test_places_flag(self, trades_csv, capsys):
        assert cli.main(["--input", str(trades_csv), "--places", "0", "--no-color"]) == cli.EXIT_OK
        assert "$1,100\n" in capsys.readouterr().out

    def test_export_log(self, trades_csv, tmp_path, capsys):
        log_path = tmp_path / "run.log"

        assert cli.main(["--input", str(trades_csv), "--export-log", str(log_path), "--no-color"]) == cli.EXIT_OK

        text = log_path.read_text(encoding="utf-8")
        assert "REALIZED: AAPL" in text
        assert "INSUFFICIENT_SHARES" in text
        assert f"[Saved log] {log_path}" in capsys.readouterr().out

    def test_missing_input_configuration(self, capsys):
        assert cli.main([]) == cli.EXIT_INPUT_ERROR
        assert "GAINS_INPUT_CSV" in capsys.readouterr().err

    def test_missing_file(self, tmp_path):
        assert cli.main(["--input", str(tmp_path / "nope.csv"), "--no-color"]) == cli.EXIT_INPUT_ERROR

    def test_malformed_file(self, tmp_path):
        path = tmp_path / "bad.csv"
        path.write_text("2025-01-01,BUY,AAPL,lots,1.00\n", encoding="utf-8")

        assert cli.main(["--input", str(path), "--no-color"]) == cli.EXIT_INPUT_ERROR

    def test_negative_places(self, trades_csv):
        assert cli.main(["--input", str(trades_csv), "--places", "-1"]) == cli.EXIT_INPUT_ERROR

    def test_ledger_fault_exit_code(self, trades_csv, monkeypatch):
        def explode(self, transactions):
            raise LedgerExhausted("AAPL", 3)

        monkeypatch.setattr(cli.TransactionProcessor, "process_all", explode)

        assert cli.main(["--input", str(trades_csv), "--no-color"]) == cli.EXIT_LEDGER_FAULT


class TestGenerateTransactions:

    def test_generates_loadable_file(self, tmp_path, capsys):
        out = tmp_path / "sample.csv"

        code = generate_transactions.main(["--output", str(out), "--count", "15", "--seed", "5",
                                           "--symbols", "aapl, tsla"])

        assert code == 0
        lines = out.read_text().splitlines()
        assert len(lines) == 16
        assert {line.split(",")[2] for line in lines[1:]} <= {"AAPL", "TSLA"}
        assert "CSV file generated" in capsys.readouterr().out

        assert cli.main(["--input", str(out), "--no-color", "--quiet-sales"]) == cli.EXIT_OK

    def test_rejects_negative_count(self, tmp_path):
        assert generate_transactions.main(["--output", str(tmp_path / "x.csv"), "--count", "-2"]) == 1

    def test_rejects_empty_symbol_list(self, tmp_path):
        assert generate_transactions.main(["--output", str(tmp_path / "x.csv"), "--symbols", " , "]) == 1
