"""Custom exceptions for EmailShield."""


class EmailShieldError(Exception):
    """Base exception for application-level errors."""


class InvalidInputError(EmailShieldError):
    """Raised when an email field handed to the engine is not text."""


class EmailParseError(EmailShieldError):
    """Raised when an email file cannot be read or parsed."""


class MissingFieldsError(EmailShieldError):
    """Raised by form validation when a required field is blank."""

    def __init__(self, missing: list[str]) -> None:
        super().__init__("Please fill in all fields")
        self.missing = missing


class RecordNotFoundError(EmailShieldError, KeyError):
    """Raised when a result or history id is unknown."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "record not found"


class ConfigError(EmailShieldError):
    """Raised when configuration cannot be loaded or validated."""
