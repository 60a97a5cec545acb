"""Email input model and parsing."""

from emailshield.domain.email.models import DEFAULT_SENDER, DEFAULT_SUBJECT, EmailInput
from emailshield.domain.email.parse import (
    from_eml,
    from_fields,
    from_raw_text,
    is_valid_file,
    parse_email_file,
    parse_email_text,
    require_fields,
)

__all__ = [
    "DEFAULT_SENDER",
    "DEFAULT_SUBJECT",
    "EmailInput",
    "from_eml",
    "from_fields",
    "from_raw_text",
    "is_valid_file",
    "parse_email_file",
    "parse_email_text",
    "require_fields",
]
