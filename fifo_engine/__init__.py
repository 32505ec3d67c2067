"""
FIFO Capital Gains Engine

This module implements FIFO (First-In-First-Out) lot matching for computing
realized capital gains/losses from a chronological stream of BUY/SELL
transactions.

Key Components:
- LotLedger: per-symbol queues of open purchase lots
- FifoMatchingEngine: matches a SELL against the oldest lots
- GainAggregator: running realized gain/loss per symbol
- TransactionProcessor: routes a transaction stream through the above
- LedgerValidator: checks ledger invariants after a run

Architecture:
- Transactions and lots are immutable values
- Partially consumed lots are replaced at the front of their queue
- A SELL larger than the open position is rejected without touching state
- Decimal arithmetic throughout; rounding happens only when rendering

Usage:
    from fifo_engine import TransactionProcessor

    processor = TransactionProcessor(logger_manager)
    result = processor.process_all(transactions)
    totals = processor.summary()
"""

from .aggregator import GainAggregator
from .engine import FifoMatchingEngine
from .exceptions import (
    EmptyLedger,
    FifoEngineError,
    InsufficientShares,
    LedgerConsistencyError,
    LedgerExhausted,
)
from .ledger import LotLedger
from .models import (
    Lot,
    LotMatch,
    ProcessingResult,
    RealizedGain,
    RejectedSale,
    Transaction,
    ValidationResult,
)
from .processor import TransactionProcessor
from .sink import ReportSink
from .validator import LedgerValidator

__all__ = [
    'EmptyLedger',
    'FifoEngineError',
    'FifoMatchingEngine',
    'GainAggregator',
    'InsufficientShares',
    'LedgerConsistencyError',
    'LedgerExhausted',
    'LedgerValidator',
    'Lot',
    'LotLedger',
    'LotMatch',
    'ProcessingResult',
    'RealizedGain',
    'RejectedSale',
    'ReportSink',
    'Transaction',
    'TransactionProcessor',
    'ValidationResult',
]

__version__ = '1.0.0'
