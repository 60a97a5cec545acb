import asyncio

import pytest

from emailshield.core.errors import EmailParseError, MissingFieldsError, RecordNotFoundError
from emailshield.domain.email.models import EmailInput


def test_analyze_fields_records_history(service, phishing_email):
    result = service.analyze_fields(**phishing_email)
    assert result.id == "email_test1"
    assert service.get_result(result.id) is result
    latest = service.history.list()[0]
    assert latest.id == result.id
    assert latest.threat_score == 38


def test_blank_form_field_is_rejected_before_scoring(service):
    with pytest.raises(MissingFieldsError):
        service.analyze_fields("Hi", "   ", "body")
    assert len(service.history) == 3


def test_analyze_text_uses_header_scan(service):
    result = service.analyze_text("Subject: Free prize inside!\nFrom: marketing@offers.com\nYou are a winner")
    assert result.subject == "Free prize inside!"
    assert result.sender == "marketing@offers.com"
    assert [item.content for item in result.detected_elements] == ["free", "winner"]


def test_analyze_file(service, tmp_path):
    path = tmp_path / "message.txt"
    path.write_text("Subject: Lunch\nFrom: bob@corp.example\n\nSee you at noon\n", encoding="utf-8")
    result = service.analyze_file(path)
    assert result.subject == "Lunch"
    assert result.threat_score == 2


def test_analyze_file_missing(service, tmp_path):
    with pytest.raises(EmailParseError):
        service.analyze_file(tmp_path / "absent.eml")


def test_analyze_async_matches_sync(service):
    email = EmailInput(subject="urgent", sender="a@b.com", content="verify your login")
    result = asyncio.run(service.analyze_async(email))
    assert result.threat_score == 20
    assert service.get_result(result.id).comparable() == result.comparable()


def test_results_are_bounded(service):
    ids = [service.analyze(EmailInput(subject=f"s{i}", sender="a@b.com", content="")).id for i in range(7)]
    with pytest.raises(RecordNotFoundError):
        service.get_result(ids[0])
    with pytest.raises(RecordNotFoundError):
        service.get_result(ids[1])
    assert service.get_result(ids[-1]).subject == "s6"
    # history keeps everything, only the result cache is bounded
    assert len(service.history) == 10


def test_history_bound_comes_from_config(tmp_path):
    from emailshield.app.service import AnalysisService
    from emailshield.config.settings import AppConfig

    service = AnalysisService(config=AppConfig(seed_history=False, max_history=2, report_dir=str(tmp_path)))
    for i in range(5):
        service.analyze(EmailInput(subject=f"s{i}", sender="a@b.com", content=""))
    assert [entry.subject for entry in service.history.list()] == ["s4", "s3"]


def test_indicators_are_kept_beside_each_result(service, phishing_email):
    result = service.analyze_fields(**phishing_email)
    indicators = service.get_indicators(result.id)
    assert indicators.result_id == result.id
    assert [(link.url, link.risk_score) for link in indicators.links] == [("http://evil.example/login", 15)]
    assert indicators.sender.indicators == ["impersonation_name"]
    with pytest.raises(RecordNotFoundError):
        service.get_indicators("missing")
