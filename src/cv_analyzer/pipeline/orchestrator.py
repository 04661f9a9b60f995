"""Main pipeline orchestrator - validation, AI analysis and fallbacks."""

from __future__ import annotations

import logging
import time

from cv_analyzer.clients.llm_client import LLMClient
from cv_analyzer.errors import AnalysisClientError
from cv_analyzer.models.analysis import AnalysisOutcome, AnalysisResult, AnalysisStatus
from cv_analyzer.models.document import ExtractedDocument
from cv_analyzer.normalize.normalizer import ResponseNormalizer
from cv_analyzer.parsers.pdf_extractor import FALLBACK_TEXT
from cv_analyzer.pipeline.document_analyst import DocumentAnalyst
from cv_analyzer.pipeline.sample_analysis import sample_analysis
from cv_analyzer.utils.input_validator import validate_documents

logger = logging.getLogger(__name__)

Document = str | ExtractedDocument


def _split(document: Document) -> tuple[object, bool]:
    if isinstance(document, ExtractedDocument):
        return document.text, document.is_fallback
    # plain text from extract_text/parse_pdf carries no flag
    return document, isinstance(document, str) and FALLBACK_TEXT in document


class AnalysisOrchestrator:
    """Validate -> (fallback short-circuit) -> LLM -> normalize."""

    def __init__(self, llm: LLMClient, normalizer: ResponseNormalizer | None = None):
        self.analyst = DocumentAnalyst(llm, normalizer)

    async def run(self, job_description: Document, cv: Document) -> AnalysisOutcome:
        """Analyze a job description against a CV.

        Either argument may be plain text or an ExtractedDocument; documents
        tagged as fallback content skip the AI call entirely.

        Raises:
            ValidationError: the input text is unusable. Nothing else is
                raised; AI failures produce a ``fallback`` outcome.
        """
        job_text, job_is_fallback = _split(job_description)
        cv_text, cv_is_fallback = _split(cv)

        validate_documents(job_text, cv_text)

        if job_is_fallback or cv_is_fallback:
            logger.warning("Input contains placeholder text from failed extraction; returning sample analysis")
            return AnalysisOutcome(status=AnalysisStatus.FALLBACK, result=sample_analysis())

        start = time.monotonic()
        try:
            normalized = await self.analyst.analyze(job_text, cv_text)
        except AnalysisClientError as exc:
            logger.warning(
                "AI analysis failed (%s, status=%s): %s; returning sample analysis",
                exc.kind.value,
                exc.http_status,
                exc,
            )
            return AnalysisOutcome(
                status=AnalysisStatus.FALLBACK,
                result=sample_analysis(),
                error=exc.to_record(),
            )

        status = AnalysisStatus.ANALYZED if normalized.parsed else AnalysisStatus.UNPARSED
        logger.info(
            "Analysis %s in %.1fs (score=%d, rules=%s)",
            status.value,
            time.monotonic() - start,
            normalized.result.overall_score,
            ",".join(normalized.applied_rules) or "-",
        )
        return AnalysisOutcome(status=status, result=normalized.result)

    async def analyze_documents(self, job_description: Document, cv: Document) -> AnalysisResult:
        return (await self.run(job_description, cv)).result
