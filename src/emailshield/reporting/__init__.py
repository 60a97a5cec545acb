"""Report export for finished analysis results."""

from __future__ import annotations

import json

from emailshield.domain.result import AnalysisResult
from emailshield.reporting.advice import recommendations
from emailshield.reporting.pdf import render_pdf_report, report_filename
from emailshield.reporting.text import render_text_report


def to_json(result: AnalysisResult, *, indent: int | None = 2) -> str:
    return json.dumps(result.to_payload(), ensure_ascii=True, indent=indent)


__all__ = [
    "recommendations",
    "render_pdf_report",
    "render_text_report",
    "report_filename",
    "to_json",
]
