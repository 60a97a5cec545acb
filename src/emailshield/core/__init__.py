"""Shared errors and logging setup."""

from emailshield.core.errors import (
    ConfigError,
    EmailParseError,
    EmailShieldError,
    InvalidInputError,
    MissingFieldsError,
    RecordNotFoundError,
)
from emailshield.core.logging import configure_logging

__all__ = [
    "ConfigError",
    "EmailParseError",
    "EmailShieldError",
    "InvalidInputError",
    "MissingFieldsError",
    "RecordNotFoundError",
    "configure_logging",
]
