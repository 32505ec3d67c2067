"""
Core system constants shared across all modules.

These define fundamental system behavior and rarely change.
Environment variables in Config.config_manager override the defaults below.
"""
from datetime import date
from decimal import Decimal

# ============================================================================
# CSV Schema
# ============================================================================

CSV_COLUMNS = ("date", "transactionType", "symbol", "quantity", "price")
"""Column order of transaction files (parser and generator)"""

CSV_DATE_FORMAT = "%Y-%m-%d"

# ============================================================================
# Precision & Display
# ============================================================================

DEFAULT_DISPLAY_PLACES = 2
"""Money values are rounded to cents when rendered, never while computing"""

MAX_DISPLAY_PLACES = 8

PRICE_QUANT = Decimal("0.01")
"""Generated prices are quantized to cents"""

# ============================================================================
# Logging
# ============================================================================

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_DIR = "logs"

# ============================================================================
# Generator Defaults
# ============================================================================

DEFAULT_GENERATOR_SYMBOLS = ("AAPL", "GOOG", "MSFT", "AMZN")

GENERATOR_START_DATE = date(2020, 1, 1)
GENERATOR_SPAN_DAYS = 5 * 365
"""Generated trades fall within five years of the start date"""

GENERATOR_MAX_QUANTITY = 200
GENERATOR_MIN_PRICE = Decimal("10.00")
GENERATOR_MAX_PRICE = Decimal("500.00")
