"""FastAPI transport around the analysis service."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from emailshield.app.service import AnalysisService, build_service
from emailshield.config.settings import AppConfig
from emailshield.core.errors import (
    EmailParseError,
    EmailShieldError,
    InvalidInputError,
    MissingFieldsError,
    RecordNotFoundError,
)
from emailshield.core.logging import configure_logging
from emailshield.reporting import render_pdf_report, render_text_report, report_filename

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: tuple[tuple[type[EmailShieldError], int], ...] = (
    (RecordNotFoundError, 404),
    (MissingFieldsError, 422),
    (InvalidInputError, 422),
    (EmailParseError, 400),
)


def _status_for(exc: EmailShieldError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status
    return 500


def create_app(service: AnalysisService | None = None) -> FastAPI:
    service = service or build_service()
    app = FastAPI(title="emailshield")
    app.state.service = service

    @app.exception_handler(EmailShieldError)
    async def _handle_error(request: Request, exc: EmailShieldError) -> JSONResponse:
        status = _status_for(exc)
        logger.warning("%s %s -> %d: %s", request.method, request.url.path, status, exc)
        return JSONResponse(status_code=status, content={"detail": str(exc)})

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/analyze")
    def analyze(payload: dict[str, Any]) -> dict[str, Any]:
        result = service.analyze_fields(
            payload.get("subject"),
            payload.get("sender"),
            payload.get("content"),
        )
        return result.to_payload()

    @app.post("/analyze/raw")
    def analyze_raw(payload: dict[str, Any]) -> dict[str, Any]:
        raw = payload.get("raw")
        if not isinstance(raw, str):
            raise InvalidInputError("raw must be text")
        if not raw.strip():
            raise MissingFieldsError(["raw"])
        return service.analyze_text(raw).to_payload()

    @app.get("/history")
    def history() -> list[dict[str, Any]]:
        return [entry.model_dump(mode="json", by_alias=True) for entry in service.history.list()]

    @app.post("/history/{entry_id}/report")
    def report_malicious(entry_id: str) -> dict[str, Any]:
        return service.history.report_malicious(entry_id).model_dump(mode="json", by_alias=True)

    @app.post("/history/{entry_id}/safe")
    def mark_safe(entry_id: str) -> dict[str, Any]:
        return service.history.mark_safe(entry_id).model_dump(mode="json", by_alias=True)

    @app.get("/results/{result_id}")
    def get_result(result_id: str) -> dict[str, Any]:
        return service.get_result(result_id).to_payload()

    @app.get("/results/{result_id}/indicators")
    def indicators(result_id: str) -> dict[str, Any]:
        return service.get_indicators(result_id).to_payload()

    @app.get("/results/{result_id}/report.txt", response_class=PlainTextResponse)
    def text_report(result_id: str) -> str:
        return render_text_report(service.get_result(result_id), service.get_indicators(result_id))

    @app.get("/results/{result_id}/report.pdf")
    def pdf_report(result_id: str) -> Response:
        result = service.get_result(result_id)
        return Response(
            content=render_pdf_report(result, indicators=service.get_indicators(result_id)),
            media_type="application/pdf",
            headers={"Content-Disposition": f'attachment; filename="{report_filename(result)}"'},
        )

    return app


def main(config: AppConfig | None = None) -> None:
    """Serve the API with uvicorn.

    For auto-reload use the factory form: ``uvicorn emailshield.api.app:create_app --factory``.
    """

    import uvicorn

    service = build_service(config)
    configure_logging(service.config.log_level, service.config.log_format)
    logger.info("starting api on %s:%d", service.config.api_host, service.config.api_port)
    uvicorn.run(create_app(service), host=service.config.api_host, port=service.config.api_port)
