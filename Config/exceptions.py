# Config/exceptions.py
"""
Custom exceptions for configuration validation.
Each names the environment variable involved and how to fix it.
"""

from typing import Any, Optional


class ConfigError(Exception):
    """Base exception for all configuration errors."""
    pass


class ConfigValidationError(ConfigError):
    """Raised when an environment value fails validation."""

    def __init__(self, key: str, value: Any, reason: str, suggestion: Optional[str] = None):
        self.key = key
        self.value = value
        self.reason = reason
        self.suggestion = suggestion

        msg = f"Invalid config: {key}={value!r}\n  Reason: {reason}"
        if suggestion:
            msg += f"\n  Suggestion: {suggestion}"
        super().__init__(msg)


class ConfigRangeError(ConfigValidationError):
    """Raised when a numeric setting is outside its allowed range."""

    def __init__(self, key: str, value: Any, min_val: Optional[int], max_val: Optional[int]):
        bounds = []
        if min_val is not None:
            bounds.append(f">= {min_val}")
        if max_val is not None:
            bounds.append(f"<= {max_val}")

        suggestion = None
        if min_val is not None and value < min_val:
            suggestion = f"export {key}={min_val}"
        elif max_val is not None and value > max_val:
            suggestion = f"export {key}={max_val}"

        super().__init__(key, value, f"Value must be {' and '.join(bounds)}", suggestion)


class ConfigTypeError(ConfigValidationError):
    """Raised when a setting cannot be read as the expected type."""

    def __init__(self, key: str, value: Any, expected_type: type):
        reason = f"Expected {expected_type.__name__}, got {value!r}"
        super().__init__(key, value, reason, f"Set {key} to a valid {expected_type.__name__}")


class ConfigMissingError(ConfigError):
    """Raised when a required setting is missing."""

    def __init__(self, key: str, location: str):
        self.key = key
        self.location = location
        super().__init__(f"Required config missing: {key}\n  Expected in: {location}")
