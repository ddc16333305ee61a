"""
Command-line entrypoint: scan a source file locally or through a running API.
"""

import json
from enum import Enum
from pathlib import Path
from typing import Optional

import typer

from backend.analyzers.common.service_client import analyze_remote, report_remote

from .config import ServiceConfig, setup_logging
from .orchestrator import build_report, run_analysis


class OutputFormat(str, Enum):
    json = "json"
    markdown = "markdown"


class LanguageChoice(str, Enum):
    javascript = "javascript"
    typescript = "typescript"
    python = "python"
    go = "go"
    rust = "rust"
    java = "java"
    cpp = "cpp"


app = typer.Typer(help="AI Debug Helper: find bugs and hallucinated APIs in code snippets")


@app.command()
def scan(
    file: Path = typer.Argument(..., help="Source file to scan"),
    language: Optional[LanguageChoice] = typer.Option(
        None, "--language", "-l", help="Language of the file (auto-detected when omitted)"
    ),
    output_format: OutputFormat = typer.Option(
        OutputFormat.json, "--format", "-f", help="Output format"
    ),
    remote: Optional[str] = typer.Option(
        None, help="Base URL of a running Debug Helper API, e.g. http://127.0.0.1:8000"
    ),
) -> None:
    config = ServiceConfig.from_env()
    setup_logging(config.log_level)

    try:
        code = file.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        typer.echo(f"[!] Failed to read {file}: {e}", err=True)
        raise typer.Exit(code=2)

    lang = language.value if language else None

    if remote:
        if output_format is OutputFormat.markdown:
            response = report_remote(code, lang, base_url=remote)
        else:
            response = analyze_remote(code, lang, base_url=remote)
        if not response["ok"]:
            typer.echo(f"[!] Remote analysis failed: {response['error']}", err=True)
            raise typer.Exit(code=2)
        if output_format is OutputFormat.markdown:
            typer.echo(response["data"]["markdown"])
        else:
            typer.echo(json.dumps(response["data"], indent=2))
        return

    if output_format is OutputFormat.markdown:
        typer.echo(build_report(code, lang))
    else:
        typer.echo(json.dumps(run_analysis(code, lang, record=False), indent=2))


def main() -> None:
    app()


if __name__ == "__main__":
    main()
