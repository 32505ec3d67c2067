#!/usr/bin/env python3
"""
Generate Transactions

Writes a random, date-ordered transactions CSV for trying out the calculator.

Usage:
    python -m scripts.generate_transactions --output sample_transactions.csv --count 10
    python -m scripts.generate_transactions --output big.csv --count 5000 --seed 42 --symbols AAPL,MSFT
"""

import argparse
import sys

from Config.config_manager import load_app_config
from Config.exceptions import ConfigError
from Shared_Utils.csv_manager import CsvManager
from Shared_Utils.logging_manager import LoggerManager


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Generate a random transactions CSV.")
    parser.add_argument('--output', type=str, default='sample_transactions.csv', help="Destination CSV path.")
    parser.add_argument('--count', type=int, default=10, help="Number of transactions to generate.")
    parser.add_argument('--seed', type=int, default=None, help="Random seed for reproducible files.")
    parser.add_argument('--symbols', type=str, default=None,
                        help="Comma-separated symbols (overrides GAINS_GENERATOR_SYMBOLS).")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    try:
        config = load_app_config()
    except ConfigError as e:
        print(f"[ERROR] {e}", file=sys.stderr)
        return 1

    if args.count < 0:
        print(f"[ERROR] --count must be non-negative, got {args.count}", file=sys.stderr)
        return 1

    symbols = config.generator_symbols
    if args.symbols:
        symbols = tuple(s.strip().upper() for s in args.symbols.split(",") if s.strip())
        if not symbols:
            print(f"[ERROR] --symbols lists no symbols: {args.symbols!r}", file=sys.stderr)
            return 1

    logger_manager = LoggerManager({'log_level': config.log_level, 'log_dir': str(config.log_dir),
                                    'log_to_file': config.log_to_file})
    try:
        CsvManager(logger_manager, symbols=symbols).generate_csv(args.output, args.count, seed=args.seed)
    except OSError as e:
        logger_manager.get_logger('fifo_logger').error(f"❌ Error generating CSV: {e}", exc_info=True)
        return 1
    finally:
        logger_manager.close()

    print(f"✅ CSV file generated: {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
