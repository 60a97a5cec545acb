"""Turn form fields, pasted text and email files into ``EmailInput``."""

from __future__ import annotations

from email import policy
from email.message import Message
from email.parser import BytesParser
from email.utils import getaddresses
from html.parser import HTMLParser
import logging
import os
from pathlib import Path
import re

from emailshield.core.errors import EmailParseError, InvalidInputError, MissingFieldsError
from emailshield.domain.email.models import DEFAULT_SENDER, DEFAULT_SUBJECT, EmailInput

logger = logging.getLogger(__name__)

_SUBJECT_LINE = re.compile(r"Subject: (.*)", re.IGNORECASE)
_FROM_LINE = re.compile(r"From: (.*)", re.IGNORECASE)

# Kept on EmailInput.headers for the sender checks.
ADVISORY_HEADERS = ("from", "return-path", "reply-to", "authentication-results")


class _TextCollector(HTMLParser):
    def __init__(self) -> None:
        super().__init__()
        self.chunks: list[str] = []
        self._skip = 0

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag.lower() in {"script", "style"}:
            self._skip += 1

    def handle_endtag(self, tag: str) -> None:
        if tag.lower() in {"script", "style"} and self._skip:
            self._skip -= 1

    def handle_data(self, data: str) -> None:
        if not self._skip:
            self.chunks.append(data)


def html_to_text(html: str) -> str:
    collector = _TextCollector()
    collector.feed(html or "")
    return " ".join(" ".join(collector.chunks).split())


def _check_text(fields: dict[str, object]) -> None:
    for name, value in fields.items():
        if value is not None and not isinstance(value, str):
            raise InvalidInputError(f"{name} must be text, got {type(value).__name__}")


def _default(value: str | None, fallback: str) -> str:
    clean = (value or "").strip()
    return clean or fallback


def require_fields(subject: str | None, sender: str | None, content: str | None) -> None:
    """Form-level check applied before the engine is called."""

    fields = {"subject": subject, "sender": sender, "content": content}
    missing = [name for name, value in fields.items() if not str(value or "").strip()]
    if missing:
        raise MissingFieldsError(missing)


def from_fields(subject: str | None, sender: str | None, content: str | None) -> EmailInput:
    _check_text({"subject": subject, "sender": sender, "content": content})
    return EmailInput(
        subject=_default(subject, DEFAULT_SUBJECT),
        sender=_default(sender, DEFAULT_SENDER),
        content=content or "",
    )


def from_raw_text(raw: str) -> EmailInput:
    """Scan the first ``Subject:``/``From:`` lines; the whole text is the content."""

    subject = _SUBJECT_LINE.search(raw or "")
    sender = _FROM_LINE.search(raw or "")
    return EmailInput(
        subject=_default(subject.group(1) if subject else None, DEFAULT_SUBJECT),
        sender=_default(sender.group(1) if sender else None, DEFAULT_SENDER),
        content=raw or "",
    )


def _looks_like_eml(raw: str) -> bool:
    """True when the text opens with a header block naming Subject and From."""

    head, sep, _ = raw.replace("\r\n", "\n").lstrip().partition("\n\n")
    if not sep:
        return False
    names = {line.split(":", 1)[0].strip().lower() for line in head.splitlines() if ":" in line}
    return {"subject", "from"} <= names


def _part_text(part: Message) -> str:
    data = part.get_payload(decode=True)
    if not data:
        return ""
    try:
        return data.decode(part.get_content_charset() or "utf-8", errors="replace")
    except LookupError:
        return data.decode("utf-8", errors="replace")


def _extract_body(message: Message) -> str:
    """Plain-text parts win; HTML parts are stripped only when there is no plain text."""

    found: dict[str, list[str]] = {"text/plain": [], "text/html": []}
    for part in message.walk():
        if part.is_multipart() or part.get_content_disposition() == "attachment":
            continue
        bucket = found.get(part.get_content_type())
        text = _part_text(part) if bucket is not None else ""
        if text:
            bucket.append(text)
    if found["text/plain"]:
        return "\n".join(found["text/plain"])
    return "\n".join(html_to_text(item) for item in found["text/html"])


def _first_address(raw_value: str) -> str:
    for _, addr in getaddresses([raw_value or ""]):
        if addr.strip():
            return addr.strip()
    return ""


def _advisory_headers(message: Message) -> dict[str, str]:
    headers: dict[str, str] = {}
    for name in ADVISORY_HEADERS:
        value = message.get(name)
        if value is not None and str(value).strip():
            headers[name] = str(value).strip()
    return headers


def from_eml(raw: str) -> EmailInput:
    """Parse an RFC 822 message with the stdlib ``email`` package.

    Content is the decoded body only; header lines are not scored.
    """

    message = BytesParser(policy=policy.default).parsebytes(raw.encode("utf-8", errors="replace"))
    return EmailInput(
        subject=_default(str(message.get("Subject") or ""), DEFAULT_SUBJECT),
        sender=_default(_first_address(str(message.get("From") or "")), DEFAULT_SENDER),
        content=_extract_body(message),
        headers=_advisory_headers(message),
    )


def parse_email_text(raw: str) -> EmailInput:
    if _looks_like_eml(raw or ""):
        return from_eml(raw)
    return from_raw_text(raw)


def is_valid_file(path: str | Path) -> bool:
    p = Path(path)
    return p.is_file() and os.access(p, os.R_OK)


def parse_email_file(path: str | Path) -> EmailInput:
    p = Path(path)
    if not is_valid_file(p):
        raise EmailParseError(f"File does not exist or cannot be read: {p}")
    try:
        raw = p.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise EmailParseError(f"Failed to read file {p}: {exc}") from exc
    logger.info("parsing email file %s (%d chars)", p.name, len(raw))
    return parse_email_text(raw)
