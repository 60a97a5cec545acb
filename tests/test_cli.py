import json

import pytest

from emailshield import cli


@pytest.fixture(autouse=True)
def _quiet_logging(monkeypatch):
    monkeypatch.setattr(cli, "configure_logging", lambda *args, **kwargs: None)


def test_analyze_prints_json(capsys):
    code = cli.main(
        ["analyze", "--subject", "Meeting", "--sender", "hr@company.com", "--content", "Agenda attached"]
    )
    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["threatScore"] == 2
    assert payload["verdict"] == "low"
    assert payload["id"].startswith("email_")


def test_analyze_text_format_and_pdf(capsys, tmp_path):
    pdf_path = tmp_path / "report.pdf"
    code = cli.main(
        [
            "analyze",
            "--subject",
            "urgent",
            "--sender",
            "x@tempmail.com",
            "--content",
            "click http://x.test",
            "--format",
            "text",
            "--pdf",
            str(pdf_path),
        ]
    )
    assert code == 0
    out = capsys.readouterr().out
    assert "EMAIL THREAT ANALYSIS REPORT" in out
    assert "- http://x.test: risk 0\n" in out
    assert pdf_path.read_bytes().startswith(b"%PDF")


def test_missing_fields_exit_code(capsys):
    code = cli.main(["analyze", "--subject", "Hi"])
    assert code == 2
    assert "error: Please fill in all fields" in capsys.readouterr().err


def test_analyze_file(capsys, tmp_path):
    path = tmp_path / "mail.eml"
    path.write_text("Subject: Win cash\nFrom: promo@offers.com\n\nFree money\n", encoding="utf-8")
    assert cli.main(["analyze", "--file", str(path)]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["categories"]["spam"]["score"] == 40


def test_history_lists_seeded_samples(capsys, monkeypatch):
    monkeypatch.delenv("EMAILSHIELD_SEED_HISTORY", raising=False)
    assert cli.main(["history"]) == 0
    entries = json.loads(capsys.readouterr().out)
    assert [entry["id"] for entry in entries] == ["1", "2", "3"]


def test_serve_hands_the_loaded_config_to_the_api(monkeypatch):
    pytest.importorskip("fastapi")
    import emailshield.api.app as api_module

    seen = {}
    monkeypatch.setenv("EMAILSHIELD_API_PORT", "9123")
    monkeypatch.setattr(api_module, "main", lambda config: seen.setdefault("port", config.api_port))
    assert cli.main(["serve"]) == 0
    assert seen == {"port": 9123}
