"""Tests for the typer CLI."""

import json

import pytest
from typer.testing import CliRunner

from cv_analyzer import cli
from cv_analyzer.errors import NetworkError
from cv_analyzer.parsers.pdf_extractor import PdfExtractor
from cv_analyzer.pipeline.orchestrator import AnalysisOrchestrator
from cv_analyzer.service import AnalysisService
from pdf_samples import make_pdf

runner = CliRunner()


@pytest.fixture
def documents(tmp_path, sample_jd_text, sample_cv_text):
    jd = tmp_path / "jd.txt"
    cv = tmp_path / "cv.md"
    jd.write_text(sample_jd_text, encoding="utf-8")
    cv.write_text(sample_cv_text, encoding="utf-8")
    return jd, cv


@pytest.fixture
def fake_service(monkeypatch, mock_llm_client, fast_extraction_config, pymupdf_backend):
    service = AnalysisService(
        AnalysisOrchestrator(mock_llm_client),
        PdfExtractor(fast_extraction_config, backend=pymupdf_backend),
    )
    monkeypatch.setattr(AnalysisService, "from_config", lambda config=None: service)
    return service


class TestAnalyzeCommand:
    def test_json_output(self, fake_service, documents, well_formed_analysis):
        jd, cv = documents

        result = runner.invoke(cli.app, ["analyze", "--jd", str(jd), "--cv", str(cv), "--json"])

        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        assert payload["success"] is True
        assert payload["status"] == "analyzed"
        assert payload["data"] == well_formed_analysis

    def test_table_output(self, fake_service, documents):
        jd, cv = documents

        result = runner.invoke(cli.app, ["analyze", "--jd", str(jd), "--cv", str(cv)])

        assert result.exit_code == 0, result.output
        assert "Overall: 82" in result.output
        assert "Kubernetes" in result.output

    def test_fallback_notice(self, fake_service, mock_llm_client, documents):
        mock_llm_client.invoke.side_effect = NetworkError("down")
        jd, cv = documents

        result = runner.invoke(cli.app, ["analyze", "--jd", str(jd), "--cv", str(cv)])

        assert result.exit_code == 0
        assert "sample analysis" in result.output

    def test_validation_failure_exits_1(self, fake_service, tmp_path, documents):
        short = tmp_path / "short.txt"
        short.write_text("Too short", encoding="utf-8")
        _, cv = documents

        result = runner.invoke(cli.app, ["analyze", "--jd", str(short), "--cv", str(cv)])

        assert result.exit_code == 1
        assert "too short" in result.output

    def test_missing_file_exits_1(self, fake_service, tmp_path, documents):
        _, cv = documents
        result = runner.invoke(
            cli.app, ["analyze", "--jd", str(tmp_path / "nope.pdf"), "--cv", str(cv)]
        )
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_unsupported_format_exits_1(self, fake_service, tmp_path, documents):
        docx = tmp_path / "jd.docx"
        docx.write_bytes(b"PK")
        _, cv = documents
        result = runner.invoke(cli.app, ["analyze", "--jd", str(docx), "--cv", str(cv)])
        assert result.exit_code == 1
        assert "Unsupported file format" in result.output


class TestExtractCommand:
    def test_extracts_pdf_text(self, tmp_path):
        pdf = tmp_path / "cv.pdf"
        pdf.write_bytes(make_pdf("Jane Doe Backend Developer"))

        result = runner.invoke(cli.app, ["extract", str(pdf)])

        assert result.exit_code == 0, result.output
        assert "Jane Doe Backend Developer" in result.output

    def test_blank_pdf_strict_exits_1(self, tmp_path):
        pdf = tmp_path / "blank.pdf"
        pdf.write_bytes(make_pdf(""))

        result = runner.invoke(cli.app, ["extract", str(pdf), "--strict"])

        assert result.exit_code == 1
        assert "no extractable text" in result.output

    def test_blank_pdf_prints_placeholder(self, tmp_path):
        pdf = tmp_path / "blank.pdf"
        pdf.write_bytes(make_pdf(""))

        result = runner.invoke(cli.app, ["extract", str(pdf)])

        assert result.exit_code == 0
        assert "[PLACEHOLDER]" in result.output


class TestInfoCommand:
    def test_shows_page_count(self, tmp_path):
        pdf = tmp_path / "doc.pdf"
        pdf.write_bytes(make_pdf("one", "two", "three"))

        result = runner.invoke(cli.app, ["info", str(pdf)])

        assert result.exit_code == 0, result.output
        assert "Pages: 3" in result.output
