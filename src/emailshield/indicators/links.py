"""Per-link heuristics: host shape, brand look-alikes, shorteners, ports and paths."""

from __future__ import annotations

import ipaddress
import re
from urllib.parse import urlsplit

from emailshield.indicators.models import LinkIndicator

KNOWN_MALICIOUS_DOMAINS = ("malicious-domain.com", "phishing-site.net", "fake-bank.com")

SPOOFED_BRANDS = (
    "google",
    "microsoft",
    "apple",
    "amazon",
    "paypal",
    "facebook",
    "dropbox",
    "linkedin",
    "instagram",
    "twitter",
    "bank",
    "chase",
    "wellsfargo",
    "citibank",
)
SUSPICIOUS_TLDS = frozenset(
    {
        "tk", "ml", "ga", "cf", "gq", "xyz", "top", "info",
        "live", "online", "site", "stream", "club", "icu", "work", "link",
    }
)
URL_SHORTENERS = frozenset(
    {
        "bit.ly", "tinyurl.com", "goo.gl", "t.co", "ow.ly", "is.gd", "buff.ly",
        "rebrand.ly", "cutt.ly", "tiny.cc", "shorte.st", "adf.ly", "bc.vc",
    }
)
DECEPTIVE_PATH_TOKENS = ("login", "account", "secure", "verify")

INVALID_URL_SCORE = 90
MALFORMED_URL_SCORE = 85
KNOWN_MALICIOUS_SCORE = 100
POINTS = {
    "ip_literal_host": 70,
    "long_host": 40,
    "suspicious_tld": 30,
    "url_shortener": 25,
    "brand_lookalike": 60,
    "unusual_port": 25,
    "deep_subdomains": 20,
    "deceptive_path": 15,
}
LONG_HOST_ABOVE = 40
MAX_DOTS = 3

_HOSTNAME = re.compile(r"(?:[a-z0-9](?:[a-z0-9-]{0,61}[a-z0-9])?\.)+[a-z]{2,63}", re.ASCII)
_TRAILING_PUNCTUATION = ".,;:!?)]}>'\""


def levenshtein(a: str, b: str) -> int:
    if a == b:
        return 0
    if not a or not b:
        return len(a) or len(b)
    prev = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        curr = [i]
        for j, cb in enumerate(b, start=1):
            curr.append(min(curr[j - 1] + 1, prev[j] + 1, prev[j - 1] + (ca != cb)))
        prev = curr
    return prev[-1]


def is_ip_literal(host: str) -> bool:
    try:
        ipaddress.ip_address(host)
    except ValueError:
        return False
    return True


def is_brand_lookalike(host: str) -> bool:
    """Host is within two edits of a brand, or embeds one outside its own domain.

    ``<brand>.com``/``.org``/``.net``, ``www.`` hosts and ``<brand>.``
    subdomains are left alone.
    """

    host = host.lower()
    for brand in SPOOFED_BRANDS:
        if host in {f"{brand}.com", f"{brand}.org", f"{brand}.net"}:
            continue
        if levenshtein(host, brand) <= 2:
            return True
        if brand in host and not host.startswith("www.") and not host.startswith(f"{brand}."):
            return True
    return False


def _is_valid_host(host: str) -> bool:
    return is_ip_literal(host) or bool(_HOSTNAME.fullmatch(host))


def assess_link(url: str, *, known_malicious: tuple[str, ...] = KNOWN_MALICIOUS_DOMAINS) -> LinkIndicator:
    """Score one link from 0 to 100; higher looks more dangerous."""

    candidate = (url or "").strip().rstrip(_TRAILING_PUNCTUATION)
    if not candidate:
        return LinkIndicator(url=url or "")
    try:
        parts = urlsplit(candidate)
        port = parts.port
    except ValueError:
        return LinkIndicator(url=url, risk_score=MALFORMED_URL_SCORE, indicators=["malformed_url"])

    host = (parts.hostname or "").lower()
    if parts.scheme.lower() not in {"http", "https"} or not _is_valid_host(host):
        return LinkIndicator(url=url, host=host, risk_score=INVALID_URL_SCORE, indicators=["invalid_url"])

    for domain in known_malicious:
        if domain.lower() in host:
            return LinkIndicator(
                url=url, host=host, risk_score=KNOWN_MALICIOUS_SCORE, indicators=["known_malicious_domain"]
            )

    hits: list[str] = []
    if is_ip_literal(host):
        hits.append("ip_literal_host")
    if len(host) > LONG_HOST_ABOVE:
        hits.append("long_host")
    if host.rsplit(".", 1)[-1] in SUSPICIOUS_TLDS:
        hits.append("suspicious_tld")
    if host in URL_SHORTENERS:
        hits.append("url_shortener")
    if is_brand_lookalike(host):
        hits.append("brand_lookalike")
    if port is not None and port not in {80, 443}:
        hits.append("unusual_port")
    if host.count(".") > MAX_DOTS:
        hits.append("deep_subdomains")
    path = parts.path.lower()
    if any(token in path for token in DECEPTIVE_PATH_TOKENS):
        hits.append("deceptive_path")

    score = min(100, sum(POINTS[name] for name in hits))
    return LinkIndicator(url=url, host=host, risk_score=score, indicators=hits)
