import pytest

from emailshield.core.errors import EmailParseError, InvalidInputError, MissingFieldsError
from emailshield.domain.email.parse import (
    from_fields,
    from_raw_text,
    is_valid_file,
    parse_email_file,
    parse_email_text,
    require_fields,
)


def test_from_fields_applies_placeholders():
    email = from_fields("  ", None, "body")
    assert email.subject == "Unknown Subject"
    assert email.sender == "unknown@example.com"
    assert email.content == "body"


def test_from_fields_rejects_non_text():
    with pytest.raises(InvalidInputError):
        from_fields("subject", 7, "body")


def test_require_fields_lists_blank_fields():
    with pytest.raises(MissingFieldsError) as excinfo:
        require_fields("Hi", "", "   ")
    assert excinfo.value.missing == ["sender", "content"]
    assert str(excinfo.value) == "Please fill in all fields"


def test_raw_text_scan_picks_first_headers_and_keeps_everything_as_content():
    raw = "subject: Free prize inside!\nFrom: marketing@offers.com\nClaim now"
    email = from_raw_text(raw)
    assert email.subject == "Free prize inside!"
    assert email.sender == "marketing@offers.com"
    assert email.content == raw


def test_raw_text_without_headers_uses_defaults():
    email = parse_email_text("just some pasted words")
    assert email.subject == "Unknown Subject"
    assert email.sender == "unknown@example.com"
    assert email.content == "just some pasted words"


def test_eml_message_extracts_address_and_plain_body():
    raw = """From: "IT Desk" <helpdesk@temp-mail.io>
To: victim@example.com
Subject: Verify Account
Content-Type: text/plain; charset="utf-8"

Please verify your password at https://evil.test/login
"""
    email = parse_email_text(raw)
    assert email.subject == "Verify Account"
    assert email.sender == "helpdesk@temp-mail.io"
    assert "verify your password" in email.content
    assert "Subject:" not in email.content


def test_eml_multipart_falls_back_to_html_and_skips_attachments():
    raw = """From: attacker@example.com
To: victim@example.com
Subject: Invoice
MIME-Version: 1.0
Content-Type: multipart/mixed; boundary="sep"

--sep
Content-Type: text/html; charset="utf-8"

<html><body><style>p {color: red}</style><p>Click <a href="https://x.test">here</a> to confirm</p></body></html>
--sep
Content-Type: text/plain
Content-Disposition: attachment; filename="notes.txt"

attachment text should be ignored
--sep--
"""
    email = parse_email_text(raw)
    assert email.content == "Click here to confirm"
    assert email.sender == "attacker@example.com"


def test_parse_email_file_reads_utf8(tmp_path):
    path = tmp_path / "mail.eml"
    path.write_text("Subject: Hello\nFrom: a@b.com\n\nbody text\n", encoding="utf-8")
    assert is_valid_file(path)
    email = parse_email_file(path)
    assert email.subject == "Hello"
    assert email.content.strip() == "body text"


def test_parse_email_file_missing_path(tmp_path):
    missing = tmp_path / "nope.eml"
    assert not is_valid_file(missing)
    with pytest.raises(EmailParseError):
        parse_email_file(missing)


def test_eml_keeps_transport_headers_apart_from_scored_content(engine):
    raw = """From: Billing <billing@shop.com>
Return-Path: <bounce@mailer.net>
Authentication-Results: mx.shop.com; spf=pass
List-Unsubscribe: <https://tracker.test/unsubscribe>
Subject: Receipt

Thanks for your order.
"""
    email = parse_email_text(raw)
    assert email.headers == {
        "from": "Billing <billing@shop.com>",
        "return-path": "<bounce@mailer.net>",
        "authentication-results": "mx.shop.com; spf=pass",
    }
    assert "tracker.test" not in email.content
    result = engine.analyze(email)
    assert result.categories.malicious_urls.score == 0
    assert result.categories.malicious_urls.details == "No URLs detected"


def test_pasted_text_has_no_transport_headers():
    assert from_raw_text("Subject: hi\nReturn-Path: <x@y.com>\nbody").headers == {}
