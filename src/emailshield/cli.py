"""CLI entrypoint for emailshield."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
import sys

from emailshield.app.service import AnalysisService
from emailshield.config.settings import load_config
from emailshield.core.errors import EmailShieldError
from emailshield.core.logging import configure_logging
from emailshield.reporting import render_pdf_report, render_text_report, to_json


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="emailshield")
    parser.add_argument("--config", help="Path to a YAML config file.")
    sub = parser.add_subparsers(dest="command", required=True)

    analyze = sub.add_parser("analyze", help="Score a single email.")
    analyze.add_argument("--subject", help="Email subject.")
    analyze.add_argument("--sender", help="Sender address, e.g. name@example.com.")
    analyze.add_argument("--content", help="Email body text.")
    analyze.add_argument("--file", help="Read the email from an .eml or text file instead.")
    analyze.add_argument("--format", choices=("json", "text"), default="json")
    analyze.add_argument("--pdf", help="Also write a PDF report to this path.")

    sub.add_parser("history", help="Print the analysis history as JSON.")
    sub.add_parser("serve", help="Run the HTTP API.")
    sub.add_parser("ui", help="Launch the Gradio demo.")
    return parser


def _run_analyze(service: AnalysisService, args: argparse.Namespace) -> str:
    if args.file:
        result = service.analyze_file(args.file)
    else:
        result = service.analyze_fields(args.subject, args.sender, args.content)
    indicators = service.get_indicators(result.id)
    if args.pdf:
        Path(args.pdf).write_bytes(render_pdf_report(result, indicators=indicators))
    if args.format == "text":
        return render_text_report(result, indicators)
    return to_json(result)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    config, _ = load_config(args.config)
    configure_logging(config.log_level, config.log_format)

    if args.command == "serve":
        from emailshield.api.app import main as serve_api

        serve_api(config)
        return 0
    if args.command == "ui":
        from emailshield.ui.gradio_app import main as launch_ui

        launch_ui(config)
        return 0

    service = AnalysisService(config=config)
    if args.command == "history":
        entries = [entry.model_dump(mode="json", by_alias=True) for entry in service.history.list()]
        print(json.dumps(entries, ensure_ascii=True, indent=2))
        return 0

    try:
        print(_run_analyze(service, args))
    except EmailShieldError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
