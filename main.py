import argparse
import sys
from pathlib import Path

from Config.config_manager import load_app_config
from Config.exceptions import ConfigError
from Shared_Utils.csv_manager import CsvManager, TransactionParseError
from Shared_Utils.logging_manager import LoggerManager
from Shared_Utils.precision import PrecisionUtils
from botreport.compute import build_report_bundle
from botreport.render.base import ReportRenderer
from botreport.render.text_renderer import TextRenderer
from botreport.sink import ConsoleReportSink
from fifo_engine import LedgerConsistencyError, LedgerValidator, TransactionProcessor

EXIT_OK = 0
EXIT_INPUT_ERROR = 1
EXIT_LEDGER_FAULT = 2


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Compute FIFO realized capital gains from a transactions CSV.")
    parser.add_argument('--input', type=str, default=None,
                        help="Transactions CSV (date,transactionType,symbol,quantity,price). "
                             "Defaults to GAINS_INPUT_CSV.")
    parser.add_argument('--verbose', action='store_true', help="Show DEBUG output on the console.")
    parser.add_argument('--export-log', type=str, default=None,
                        help="Write the full run log to this file when done.")
    parser.add_argument('--places', type=int, default=None,
                        help="Decimal places for money in the report (overrides GAINS_DISPLAY_PLACES).")
    parser.add_argument('--no-color', action='store_true', help="Disable ANSI colors in console logs.")
    parser.add_argument('--quiet-sales', action='store_true',
                        help="Do not print a line per sale; only the final report.")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    try:
        config = load_app_config()
        input_path = Path(args.input) if args.input else config.require_input_csv()
    except ConfigError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    places = config.display_places if args.places is None else args.places
    if places < 0:
        print(f"[ERROR] --places must be non-negative, got {places}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    logger_manager = LoggerManager({
        'log_level': 'DEBUG' if args.verbose else config.log_level,
        'log_dir': str(config.log_dir),
        'log_to_file': config.log_to_file,
        'use_color': not args.no_color,
    })
    logger = logger_manager.get_logger('report_logger')
    precision = PrecisionUtils(display_places=places)

    try:
        try:
            transactions = CsvManager(logger_manager, precision).load_transactions(input_path)
        except FileNotFoundError:
            logger.error(f"❌ Transactions file not found: {input_path}")
            return EXIT_INPUT_ERROR
        except TransactionParseError as e:
            logger.error(f"❌ {e}")
            return EXIT_INPUT_ERROR

        sink = ConsoleReportSink(precision, echo=not args.quiet_sales)
        processor = TransactionProcessor(logger_manager, report_sink=sink)
        try:
            result = processor.process_all(transactions)
        except LedgerConsistencyError as e:
            logger.critical(f"🚨 Run aborted, ledger bookkeeping is inconsistent: {e}")
            return EXIT_LEDGER_FAULT

        validation = LedgerValidator(logger_manager).validate(processor.ledger, transactions, result.rejections)
        if not validation.is_valid:
            logger.critical(f"🚨 Ledger failed validation after the run:\n{validation}")
            return EXIT_LEDGER_FAULT

        bundle = build_report_bundle(processor, result, sink.realized, source_label=input_path.name)
        print()
        renderer: ReportRenderer = TextRenderer(precision)
        print(renderer.render(bundle))
        logger.info(str(result))
        return EXIT_OK
    finally:
        if args.export_log:
            path = logger_manager.export_log(args.export_log)
            print(f"[Saved log] {path}")
        logger_manager.close()


if __name__ == "__main__":
    sys.exit(main())
