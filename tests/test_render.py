from emailshield.domain.result import RiskLevel
from emailshield.ui.render import (
    RISK_COLORS,
    category_rows,
    element_rows,
    risk_css_class,
    score_markdown,
    verdict_banner,
)


def test_category_rows_follow_fixed_order(engine, phishing_email):
    rows = category_rows(engine.analyze(phishing_email))
    assert [row[0] for row in rows] == ["Phishing", "Spam", "Malicious URLs", "Sender Reputation"]
    assert rows[0][1:3] == [75, "High"]


def test_element_rows_placeholder(engine):
    result = engine.analyze({"subject": "hello", "sender": "a@b.com", "content": "plain"})
    assert element_rows(result) == [["No suspicious elements detected", "Safe"]]


def test_element_rows_list_detected_items(engine, phishing_email):
    rows = element_rows(engine.analyze(phishing_email))
    assert rows[0] == ["http://evil.example/login", "Suspicious URL"]
    assert rows[1] == ["verify", "Phishing Keyword"]


def test_score_and_verdict_use_risk_colour(engine, phishing_email):
    result = engine.analyze(phishing_email)
    assert "38%" in score_markdown(result)
    banner = verdict_banner(result)
    assert RISK_COLORS[RiskLevel.LOW] in banner
    assert "risk-low" in banner
    assert result.verdict_details in banner


def test_risk_css_class_accepts_strings():
    assert risk_css_class("high") == "risk-high"
    assert risk_css_class(RiskLevel.MEDIUM) == "risk-medium"
