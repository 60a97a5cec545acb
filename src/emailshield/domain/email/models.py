"""Email domain models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_SUBJECT = "Unknown Subject"
DEFAULT_SENDER = "unknown@example.com"


class EmailInput(BaseModel):
    """The three fields the scoring engine looks at.

    Fields are strict: anything other than ``str`` fails validation.
    ``None`` stands for a missing field and becomes the empty string.
    ``headers`` holds lowercased transport headers when the email came from
    a message file; scoring ignores them, the advisory checks read them.
    """

    model_config = ConfigDict(strict=True, frozen=True)

    subject: str = ""
    sender: str = ""
    content: str = ""
    headers: dict[str, str] = Field(default_factory=dict)

    @field_validator("subject", "sender", "content", mode="before")
    @classmethod
    def _missing_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value
