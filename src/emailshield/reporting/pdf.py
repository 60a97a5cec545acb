"""PDF export of an analysis result (fpdf2)."""

from __future__ import annotations

from datetime import datetime, timezone
import logging

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from emailshield.domain.result import AnalysisResult, RiskLevel
from emailshield.reporting.advice import recommendations
from emailshield.indicators.models import AdvisoryIndicators
from emailshield.reporting.text import ADVISORY_TITLE, CATEGORY_TITLES, NO_ELEMENTS_TEXT, advisory_lines

logger = logging.getLogger(__name__)

PRIMARY = (37, 99, 235)
TEXT_DARK = (30, 41, 59)
FOOTER_GREY = (100, 100, 100)
RULE_GREY = (200, 200, 200)
RISK_RGB = {
    RiskLevel.HIGH: (239, 68, 68),
    RiskLevel.MEDIUM: (245, 158, 11),
    RiskLevel.LOW: (16, 185, 129),
}
FOOTER_TEXT = "EmailShield - Malicious Email Detection System"
_ELEMENT_TEXT_WIDTH = 140


def _latin1(text: str) -> str:
    # Core PDF fonts only cover latin-1.
    return str(text).encode("latin-1", "replace").decode("latin-1")


class AnalysisReportPDF(FPDF):
    def __init__(self, generated_at: datetime) -> None:
        super().__init__(orientation="P", unit="mm", format="A4")
        self.generated_at = generated_at
        self.set_margins(15, 15, 15)
        self.set_auto_page_break(auto=True, margin=20)
        self.alias_nb_pages()

    def header(self) -> None:
        if self.page_no() != 1:
            return
        self.set_fill_color(*PRIMARY)
        self.rect(0, 0, 210, 30, "F")
        self.set_text_color(255, 255, 255)
        self.set_font("Helvetica", "B", 22)
        self.set_xy(0, 7)
        self.cell(210, 10, "Email Security Analysis Report", align="C")
        self.set_font("Helvetica", "", 10)
        self.set_xy(0, 19)
        self.cell(210, 6, _latin1(f"Generated on: {self.generated_at:%Y-%m-%d %H:%M:%S %Z}".strip()), align="C")
        self.set_text_color(*TEXT_DARK)
        self.set_xy(self.l_margin, 36)

    def footer(self) -> None:
        self.set_y(-12)
        self.set_font("Helvetica", "", 10)
        self.set_text_color(*FOOTER_GREY)
        self.cell(0, 6, f"{FOOTER_TEXT} | Page {self.page_no()} of {{nb}}", align="C")

    def section_title(self, title: str) -> None:
        self.set_text_color(*TEXT_DARK)
        self.set_font("Helvetica", "B", 14)
        self.cell(0, 9, title, new_x=XPos.LMARGIN, new_y=YPos.NEXT)

    def body_line(self, text: str, *, size: int = 11, indent: float = 0.0) -> None:
        self.set_font("Helvetica", "", size)
        self.set_x(self.l_margin + indent)
        self.multi_cell(0, 6, _latin1(text), new_x=XPos.LMARGIN, new_y=YPos.NEXT)

    def fit(self, text: str, width: float) -> str:
        clean = _latin1(text)
        if self.get_string_width(clean) <= width:
            return clean
        while clean and self.get_string_width(clean + "...") > width:
            clean = clean[:-1]
        return clean + "..."


def render_pdf_report(
    result: AnalysisResult,
    generated_at: datetime | None = None,
    indicators: AdvisoryIndicators | None = None,
) -> bytes:
    """Lay out an already computed result; nothing is re-scored here."""

    pdf = AnalysisReportPDF(generated_at or datetime.now(timezone.utc))
    pdf.add_page()

    pdf.section_title("Email Information")
    pdf.body_line(f"Subject: {result.subject}")
    pdf.body_line(f"Sender: {result.sender}")
    pdf.ln(3)

    pdf.section_title("Threat Assessment")
    pdf.set_font("Helvetica", "B", 20)
    pdf.set_text_color(*RISK_RGB[result.verdict])
    pdf.cell(0, 10, f"Threat Score: {result.threat_score}%", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.set_text_color(*TEXT_DARK)
    pdf.body_line(f"Verdict: {result.verdict_details}", size=12)
    pdf.ln(3)

    pdf.section_title("Threat Categories")
    for name, assessment in result.categories.items():
        pdf.set_font("Helvetica", "B", 11)
        pdf.set_text_color(*RISK_RGB[assessment.risk])
        pdf.cell(
            0,
            6,
            f"{CATEGORY_TITLES[name]} - {assessment.risk.value.capitalize()} Risk ({assessment.score})",
            new_x=XPos.LMARGIN,
            new_y=YPos.NEXT,
        )
        pdf.set_text_color(*TEXT_DARK)
        pdf.body_line(assessment.details, indent=10)
        pdf.ln(1)

    pdf.set_draw_color(*RULE_GREY)
    pdf.line(15, pdf.get_y() + 2, 195, pdf.get_y() + 2)
    pdf.ln(6)

    pdf.section_title("Detected Elements")
    pdf.set_font("Helvetica", "", 11)
    if not result.detected_elements:
        pdf.cell(_ELEMENT_TEXT_WIDTH, 7, f"- {NO_ELEMENTS_TEXT}")
        pdf.cell(0, 7, "(Safe)", align="R", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    for element in result.detected_elements:
        pdf.cell(_ELEMENT_TEXT_WIDTH, 7, pdf.fit(f"- {element.content}", _ELEMENT_TEXT_WIDTH))
        pdf.cell(0, 7, f"({element.label})", align="R", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
    pdf.ln(3)

    if indicators is not None:
        pdf.section_title(ADVISORY_TITLE)
        for line in advisory_lines(indicators):
            pdf.body_line(line, size=10)
        pdf.ln(3)

    pdf.section_title("Recommendations")
    for item in recommendations(result):
        pdf.body_line(f"- {item}")

    data = bytes(pdf.output())
    logger.info("rendered pdf report id=%s pages=%d bytes=%d", result.id, pdf.page_no(), len(data))
    return data


def report_filename(result: AnalysisResult) -> str:
    return f"email-analysis-{int(result.analyzed_at.timestamp() * 1000)}.pdf"
