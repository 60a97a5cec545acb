import pytest

from emailshield.domain.email.models import EmailInput
from emailshield.domain.email.parse import parse_email_text
from emailshield.indicators import collect_indicators
from emailshield.indicators.links import assess_link, is_brand_lookalike, levenshtein
from emailshield.indicators.sender import assess_sender


def test_levenshtein():
    assert levenshtein("paypal", "paypa1") == 1
    assert levenshtein("", "abc") == 3
    assert levenshtein("kitten", "sitting") == 3


@pytest.mark.parametrize(
    "url,score,codes",
    [
        ("http://192.168.10.5/files", 70, ["ip_literal_host"]),
        ("https://bit.ly/x1", 25, ["url_shortener"]),
        ("http://prize.xyz:8080/", 55, ["suspicious_tld", "unusual_port"]),
        ("https://paypal-security.top/account", 100, ["suspicious_tld", "brand_lookalike", "deceptive_path"]),
        ("https://a.b.c.d.example.com/", 20, ["deep_subdomains"]),
        ("https://docs.python.org/3/", 0, []),
        ("https://www.paypal.com/signin", 0, []),
    ],
)
def test_link_checks(url, score, codes):
    finding = assess_link(url)
    assert finding.risk_score == score
    assert finding.indicators == codes


def test_known_bad_and_broken_links():
    assert assess_link("http://login.fake-bank.com/").risk_score == 100
    assert assess_link("http://no_such_host.example/").indicators == ["invalid_url"]
    assert assess_link("http://example.com:99999/").indicators == ["malformed_url"]
    assert assess_link("").risk_score == 0


def test_trailing_punctuation_is_ignored():
    assert assess_link("https://docs.python.org/3/.").risk_score == 0


def test_brand_lookalikes():
    assert is_brand_lookalike("amazom")
    assert is_brand_lookalike("secure-google-login.com")
    assert not is_brand_lookalike("google.com")
    assert not is_brand_lookalike("docs.python.org")


def test_sender_header_mismatches_and_display_name():
    raw = (
        'From: "PayPal Service" <billing@pay-mail.com>\n'
        "Return-Path: <bounce@elsewhere.net>\n"
        "Reply-To: collect@other.org\n"
        "Subject: Invoice\n"
        "\n"
        "Pay now\n"
    )
    finding = assess_sender(parse_email_text(raw))
    assert finding.indicators == ["return_path_mismatch", "reply_to_mismatch", "impersonation_name"]
    assert finding.risk_score == 95


def test_trusted_domain_needs_passing_authentication():
    plain = EmailInput(subject="", sender="team@google.com", content="")
    assert "unauthenticated_trusted_domain" in assess_sender(plain).indicators

    signed = EmailInput(
        subject="",
        sender="ceo@apple.com",
        content="",
        headers={"authentication-results": "mx.example; spf=pass smtp.mailfrom=apple.com; dkim=none"},
    )
    finding = assess_sender(signed)
    assert "unauthenticated_trusted_domain" not in finding.indicators
    assert "impersonation_name" in finding.indicators


def test_malformed_spam_and_missing_senders():
    assert assess_sender(EmailInput(sender="")).indicators == ["missing_sender"]
    assert assess_sender(EmailInput(sender="not-an-address")).indicators == ["malformed_address"]
    spam = assess_sender(EmailInput(sender="deals@spam-sender.com"))
    assert spam.risk_score == 80


def test_indicators_do_not_touch_the_threat_score(engine):
    email = EmailInput(subject="hello", sender="a@b.com", content="see http://10.0.0.1/login and http://10.0.0.1/login")
    result = engine.analyze(email)
    before = result.comparable()
    indicators = collect_indicators(email, result)
    assert result.comparable() == before
    assert result.threat_score == 20
    assert [link.url for link in indicators.links] == ["http://10.0.0.1/login"]
    assert indicators.suspicious_links[0].risk_score == 85
    payload = indicators.to_payload()
    assert payload["resultId"] == result.id
    assert payload["links"][0]["suspicious"] is True
    assert payload["sender"]["riskScore"] == 0


def test_headers_only_reach_the_advisory_checks(engine):
    bare = EmailInput(subject="Invoice", sender="billing@google.com", content="Pay now")
    signed = bare.model_copy(update={"headers": {"authentication-results": "dkim=pass"}})
    assert engine.analyze(bare).comparable() == engine.analyze(signed).comparable()
    assert assess_sender(bare).risk_score > assess_sender(signed).risk_score
