"""Sender spoofing heuristics over the address and the transport headers."""

from __future__ import annotations

import re

from emailshield.domain.email.models import EmailInput
from emailshield.indicators.models import SenderIndicator
from emailshield.scoring.engine import sender_domain

TRUSTED_DOMAINS = frozenset({"google.com", "microsoft.com", "apple.com", "amazon.com"})
SPAM_DOMAINS = frozenset({"spam-sender.com", "known-spammer.net"})
IMPERSONATION_TOKENS = (
    "admin",
    "support",
    "service",
    "security",
    "help",
    "notify",
    "no-reply",
    "paypal",
    "amazon",
    "facebook",
    "microsoft",
    "apple",
    "google",
)

MISSING_SENDER_SCORE = 100
POINTS = {
    "malformed_address": 60,
    "known_spam_domain": 80,
    "return_path_mismatch": 40,
    "reply_to_mismatch": 30,
    "impersonation_name": 25,
    "unauthenticated_trusted_domain": 75,
}

_ADDRESS = re.compile(r"[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,6}", re.ASCII)
_AUTH_PASS = re.compile(r"\b(?:spf|dkim|dmarc)\s*=\s*pass\b", re.IGNORECASE)


def has_passing_authentication(headers: dict[str, str]) -> bool:
    return bool(_AUTH_PASS.search(headers.get("authentication-results", "")))


def _header_mismatches(sender: str, domain: str, headers: dict[str, str]) -> list[str]:
    hits: list[str] = []
    return_path = headers.get("return-path")
    if return_path is not None:
        bounce = re.sub(r"[<>]", "", return_path).strip().lower()
        if not sender.lower().endswith(bounce) and not bounce.endswith(domain.lower()):
            hits.append("return_path_mismatch")
    reply_to = headers.get("reply-to")
    if reply_to is not None and domain.lower() not in reply_to.lower():
        hits.append("reply_to_mismatch")
    return hits


def assess_sender(email: EmailInput) -> SenderIndicator:
    """Score how likely the sender is spoofed, from 0 to 100."""

    sender = email.sender.strip()
    if not sender:
        return SenderIndicator(sender="", risk_score=MISSING_SENDER_SCORE, indicators=["missing_sender"])

    domain = sender_domain(sender).lower()
    headers = {name.lower(): value for name, value in email.headers.items()}
    hits: list[str] = []
    if not _ADDRESS.fullmatch(sender):
        hits.append("malformed_address")
    if domain in SPAM_DOMAINS:
        hits.append("known_spam_domain")
    hits.extend(_header_mismatches(sender, domain, headers))
    # The From header carries the display name when there is one.
    shown = headers.get("from", sender).lower()
    if any(token in shown for token in IMPERSONATION_TOKENS):
        hits.append("impersonation_name")
    if domain in TRUSTED_DOMAINS and not has_passing_authentication(headers):
        hits.append("unauthenticated_trusted_domain")

    score = min(100, sum(POINTS[name] for name in hits))
    return SenderIndicator(sender=sender, risk_score=score, indicators=hits)
