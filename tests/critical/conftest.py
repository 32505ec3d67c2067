"""
Critical Path Test Fixtures

Shared fixtures for money-critical path testing.
These fixtures provide minimal, fast setup for critical tests.
"""

import pytest
from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

from fifo_engine import LotLedger, Transaction, TransactionProcessor
from Shared_Utils.enum import TransactionType


def buy(symbol, quantity, price, on="2025-01-01"):
    """Build a BUY transaction; price given as a string to stay exact."""
    return Transaction(date.fromisoformat(on), TransactionType.BUY, symbol, quantity, Decimal(price))


def sell(symbol, quantity, price, on="2025-03-01"):
    return Transaction(date.fromisoformat(on), TransactionType.SELL, symbol, quantity, Decimal(price))


@pytest.fixture
def mock_logger():
    """Mock logger"""
    logger = MagicMock()
    logger.info = MagicMock()
    logger.warning = MagicMock()
    logger.error = MagicMock()
    logger.debug = MagicMock()
    logger.buy = MagicMock()
    logger.sell = MagicMock()
    logger.realized_gain = MagicMock()
    logger.insufficient_shares = MagicMock()
    return logger


@pytest.fixture
def mock_logger_manager(mock_logger):
    """Mock LoggerManager handing out the mock logger for every name"""
    manager = MagicMock()
    manager.get_logger.return_value = mock_logger
    return manager


@pytest.fixture
def ledger():
    return LotLedger()


@pytest.fixture
def mock_sink():
    return MagicMock()


@pytest.fixture
def processor(mock_logger_manager, mock_sink):
    return TransactionProcessor(mock_logger_manager, report_sink=mock_sink)


@pytest.fixture
def aapl_stream():
    """BUY 100@150, BUY 50@155, SELL 120@160"""
    return [
        buy("AAPL", 100, "150.00", on="2025-01-01"),
        buy("AAPL", 50, "155.00", on="2025-02-01"),
        sell("AAPL", 120, "160.00", on="2025-03-01"),
    ]


def generate_mixed_stream(pairs=5):
    """Interleaved buys/sells over two symbols, every sell covered"""
    stream = []
    for i in range(pairs):
        month = i + 1
        stream.append(buy("AAPL", 10 * (i + 1), f"{100 + i}.25", on=f"2024-{month:02d}-01"))
        stream.append(buy("MSFT", 7, f"{300 + 2 * i}.10", on=f"2024-{month:02d}-02"))
        stream.append(sell("AAPL", 5 + i, f"{105 + i}.50", on=f"2024-{month:02d}-15"))
        if i % 2:
            stream.append(sell("MSFT", 9, "310.00", on=f"2024-{month:02d}-20"))
    return stream
