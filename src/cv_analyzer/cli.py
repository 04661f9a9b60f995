"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import base64
import json
import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from cv_analyzer.config import ExtractionConfig, load_config
from cv_analyzer.errors import AnalyzerError
from cv_analyzer.models.analysis import AnalysisResponse, AnalysisStatus
from cv_analyzer.models.document import ExtractedDocument
from cv_analyzer.parsers.pdf_extractor import PdfExtractor, validate_upload
from cv_analyzer.parsers.text_cleaner import clean_text
from cv_analyzer.service import AnalysisService

app = typer.Typer(
    name="cv-analyzer",
    help="Compare a job description with a CV using a generative AI service",
    no_args_is_help=True,
)
console = Console()

PDF_CONTENT_TYPE = "application/pdf"
TEXT_SUFFIXES = (".txt", ".md")
DOCUMENT_SUFFIXES = (".pdf",) + TEXT_SUFFIXES


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


def _require_file(path: Path, label: str, suffixes: tuple[str, ...] = (".pdf",)) -> None:
    if not path.exists():
        console.print(f"[red]{label} file not found: {path}[/red]")
        raise typer.Exit(1)
    if path.suffix.lower() not in suffixes:
        console.print(f"[red]Unsupported file format: {path.suffix}[/red]")
        raise typer.Exit(1)


def _encode_pdf(path: Path, config: ExtractionConfig) -> str:
    validate_upload(path.stat().st_size, PDF_CONTENT_TYPE, config)
    return base64.b64encode(path.read_bytes()).decode("ascii")


async def _load_document(
    path: Path, extractor: PdfExtractor, config: ExtractionConfig, strict: bool
) -> str | ExtractedDocument:
    if path.suffix.lower() in TEXT_SUFFIXES:
        return clean_text(path.read_text(encoding="utf-8"))
    return await extractor.extract(_encode_pdf(path, config), strict=strict)


def _print_result(response: AnalysisResponse) -> None:
    result = response.data
    if response.status is AnalysisStatus.FALLBACK:
        console.print(
            "[yellow]AI analysis was not available; showing sample analysis data.[/yellow]"
        )
    elif response.status is AnalysisStatus.UNPARSED:
        console.print(
            "[yellow]AI response could not be parsed; see the summary for the raw analysis.[/yellow]"
        )

    score = result.overall_score
    color = "green" if score >= 75 else "yellow" if score >= 50 else "red"
    alignment = result.alignment
    console.print(
        Panel(
            f"[bold {color}]Overall: {score}[/bold {color}]\n"
            f"Technical skills: {alignment.technical_skills} | "
            f"Experience: {alignment.experience} | "
            f"Education: {alignment.education} | "
            f"Soft skills: {alignment.soft_skills}",
            title="Match score",
        )
    )
    console.print(Panel(escape(result.summary) or "-", title="Summary"))

    table = Table(show_header=False, box=None)
    for title, items in (
        ("Strengths", result.strengths),
        ("Weaknesses", result.weaknesses),
        ("Key matches", result.key_matches),
        ("Missing requirements", result.missing_requirements),
        ("Recommendations", result.recommendations),
    ):
        if items:
            table.add_row(f"[bold]{title}[/bold]", "\n".join(f"- {escape(item)}" for item in items))
    console.print(table)


@app.command()
def analyze(
    jd: Path = typer.Option(..., "--jd", help="Job description file (PDF/TXT/MD)"),
    cv: Path = typer.Option(..., "--cv", help="CV file (PDF/TXT/MD)"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
    strict: bool = typer.Option(False, "--strict", help="Fail instead of using placeholder text when PDF extraction fails"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Analyze how well a CV matches a job description."""
    _setup_logging(verbose)
    _require_file(jd, "Job description", DOCUMENT_SUFFIXES)
    _require_file(cv, "CV", DOCUMENT_SUFFIXES)

    try:
        config = load_config()
        service = AnalysisService.from_config(config)

        async def _run() -> AnalysisResponse:
            jd_doc, cv_doc = await asyncio.gather(
                _load_document(jd, service.extractor, config.extraction, strict),
                _load_document(cv, service.extractor, config.extraction, strict),
            )
            return await service.analyze(jd_doc, cv_doc)

        with console.status("Analyzing documents..."):
            response = asyncio.run(_run())
    except AnalyzerError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1)

    if as_json:
        console.print_json(json.dumps(response.model_dump(mode="json", by_alias=True)))
        return

    _print_result(response)
    if verbose:
        usage = service.orchestrator.analyst.llm.get_token_summary()
        console.print(f"[dim]Tokens: {usage['input']} in / {usage['output']} out[/dim]")


@app.command()
def extract(
    file: Path = typer.Argument(help="PDF file to extract text from"),
    strict: bool = typer.Option(False, "--strict", help="Fail instead of returning placeholder text"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Extract plain text from a PDF."""
    _setup_logging(verbose)
    _require_file(file, "PDF")

    config = load_config()
    extractor = PdfExtractor(config.extraction)
    try:
        document = asyncio.run(
            extractor.extract(_encode_pdf(file, config.extraction), strict=strict)
        )
    except AnalyzerError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1)

    if document.is_fallback:
        reason = document.failure.message if document.failure else "unknown error"
        console.print(f"[yellow]Extraction failed ({escape(reason)}); placeholder text returned.[/yellow]")
    console.print(document.text, markup=False)


@app.command()
def info(
    file: Path = typer.Argument(help="PDF file to inspect"),
) -> None:
    """Show page count and metadata of a PDF."""
    _require_file(file, "PDF")

    config = load_config()
    extractor = PdfExtractor(config.extraction)
    try:
        document = asyncio.run(extractor.read_metadata(_encode_pdf(file, config.extraction)))
    except AnalyzerError as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        raise typer.Exit(1)

    lines = [f"Pages: {document.page_count}"]
    lines += [f"{key}: {value}" for key, value in (document.metadata or {}).items()]
    console.print(Panel("\n".join(lines), title=file.name))


if __name__ == "__main__":
    app()
