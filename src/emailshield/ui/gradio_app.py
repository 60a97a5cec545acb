"""Gradio app entrypoint."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable

import gradio as gr

from emailshield.app.service import AnalysisService, build_service
from emailshield.config.settings import AppConfig
from emailshield.core.errors import EmailShieldError
from emailshield.core.logging import configure_logging
from emailshield.domain.result import AnalysisResult
from emailshield.indicators.models import AdvisoryIndicators
from emailshield.reporting import render_pdf_report, report_filename
from emailshield.reporting.text import ADVISORY_TITLE
from emailshield.ui.render import (
    CATEGORY_HEADERS,
    ELEMENT_HEADERS,
    INDICATOR_HEADERS,
    category_rows,
    element_rows,
    indicator_rows,
    score_markdown,
    verdict_banner,
)

logger = logging.getLogger(__name__)

NO_RESULT_TEXT = "Run an analysis first."


def result_outputs(result: AnalysisResult, indicators: AdvisoryIndicators) -> tuple[Any, ...]:
    return (
        score_markdown(result),
        verdict_banner(result),
        category_rows(result),
        element_rows(result),
        indicator_rows(indicators),
        result.id,
        gr.update(visible=True),
    )


def _empty_outputs() -> tuple[Any, ...]:
    return ("", "", [], [], [], "", gr.update(visible=False))


def export_pdf(service: AnalysisService, result_id: str) -> str:
    result = service.get_result(result_id)
    target_dir = Path(service.config.report_dir)
    target_dir.mkdir(parents=True, exist_ok=True)
    target = target_dir / report_filename(result)
    target.write_bytes(render_pdf_report(result, indicators=service.get_indicators(result_id)))
    return str(target)


def review_action(action: Callable[[str], object], result_id: str, done: str) -> str:
    """Run a history status change, turning unknown ids into a UI error."""

    if not result_id:
        return NO_RESULT_TEXT
    try:
        action(result_id)
    except EmailShieldError as exc:
        raise gr.Error(str(exc)) from exc
    return done


def build_demo(service: AnalysisService | None = None) -> gr.Blocks:
    service = service or build_service()

    def _analyze_paste(subject: str, sender: str, content: str):
        try:
            result = service.analyze_fields(subject, sender, content)
            return result_outputs(result, service.get_indicators(result.id))
        except EmailShieldError as exc:
            raise gr.Error(str(exc)) from exc

    def _analyze_upload(file_path: str | None):
        if not file_path:
            raise gr.Error("Please select a file to analyze")
        try:
            result = service.analyze_file(file_path)
            return result_outputs(result, service.get_indicators(result.id))
        except EmailShieldError as exc:
            raise gr.Error(str(exc)) from exc

    def _report(result_id: str) -> str:
        return review_action(service.history.report_malicious, result_id, "Email reported as malicious")

    def _mark_safe(result_id: str) -> str:
        return review_action(service.history.mark_safe, result_id, "Email marked as safe")

    def _export(result_id: str):
        if not result_id:
            raise gr.Error(NO_RESULT_TEXT)
        try:
            return export_pdf(service, result_id)
        except EmailShieldError as exc:
            raise gr.Error(str(exc)) from exc

    with gr.Blocks(title="EmailShield") as demo:
        gr.Markdown("# EmailShield\nPaste or upload an email to get a heuristic threat assessment.")
        with gr.Tabs():
            with gr.Tab("Paste Email"):
                subject = gr.Textbox(label="Subject")
                sender = gr.Textbox(label="Sender", placeholder="name@example.com")
                content = gr.Textbox(label="Content", lines=10)
                paste_btn = gr.Button("Analyze Email", variant="primary")
            with gr.Tab("Upload Email"):
                upload = gr.File(label="Email file (.eml, .txt)", type="filepath")
                upload_btn = gr.Button("Analyze File", variant="primary")

        result_id = gr.State("")
        with gr.Column(visible=False) as results:
            with gr.Row():
                score = gr.HTML()
                verdict = gr.HTML()
            categories = gr.Dataframe(headers=CATEGORY_HEADERS, label="Threat Categories", interactive=False)
            elements = gr.Dataframe(headers=ELEMENT_HEADERS, label="Detected Elements", interactive=False)
            advisory = gr.Dataframe(headers=INDICATOR_HEADERS, label=ADVISORY_TITLE, interactive=False)
            status = gr.Markdown()
            with gr.Row():
                report_btn = gr.Button("Report as Malicious", variant="stop")
                safe_btn = gr.Button("Mark as Safe")
                pdf_btn = gr.Button("Export PDF")
                new_btn = gr.Button("New Analysis")
            pdf_file = gr.File(label="PDF report")

        outputs = [score, verdict, categories, elements, advisory, result_id, results]
        paste_btn.click(_analyze_paste, inputs=[subject, sender, content], outputs=outputs)
        upload_btn.click(_analyze_upload, inputs=[upload], outputs=outputs)
        report_btn.click(_report, inputs=[result_id], outputs=[status])
        safe_btn.click(_mark_safe, inputs=[result_id], outputs=[status])
        pdf_btn.click(_export, inputs=[result_id], outputs=[pdf_file])
        new_btn.click(_empty_outputs, inputs=None, outputs=outputs)
    return demo


def main(config: AppConfig | None = None) -> None:
    service = build_service(config)
    configure_logging(service.config.log_level, service.config.log_format)
    logger.info("starting ui on %s:%d", service.config.ui_host, service.config.ui_port)
    build_demo(service).launch(server_name=service.config.ui_host, server_port=service.config.ui_port)


if __name__ == "__main__":
    main()
