"""Request-facing entry points: analyze text or uploaded PDFs.

Both calls return an AnalysisResponse envelope. Only caller errors
(validation, configuration) surface, re-raised as AnalysisFailedError with
a human-readable message.
"""

from __future__ import annotations

import asyncio
import logging

from cv_analyzer.clients.llm_client import LLMClient
from cv_analyzer.config import AppConfig, load_config
from cv_analyzer.errors import AnalysisFailedError, AnalyzerError
from cv_analyzer.models.analysis import AnalysisOutcome, AnalysisResponse
from cv_analyzer.models.document import ExtractedDocument
from cv_analyzer.parsers.pdf_extractor import PdfExtractor
from cv_analyzer.pipeline.orchestrator import AnalysisOrchestrator, Document

logger = logging.getLogger(__name__)


def _response(outcome: AnalysisOutcome) -> AnalysisResponse:
    return AnalysisResponse(success=True, status=outcome.status, data=outcome.result)


class AnalysisService:
    def __init__(self, orchestrator: AnalysisOrchestrator, extractor: PdfExtractor):
        self.orchestrator = orchestrator
        self.extractor = extractor

    @classmethod
    def from_config(cls, config: AppConfig | None = None) -> AnalysisService:
        config = config or load_config()
        llm = LLMClient(config.ai)
        return cls(AnalysisOrchestrator(llm), PdfExtractor(config.extraction))

    async def analyze(self, job_description: Document, cv: Document) -> AnalysisResponse:
        try:
            outcome = await self.orchestrator.run(job_description, cv)
        except AnalyzerError as exc:
            logger.error("Analysis error: %s", exc)
            raise AnalysisFailedError(f"Analysis failed: {exc}") from exc
        return _response(outcome)

    async def extract_documents(
        self, job_description_file: str, cv_file: str
    ) -> tuple[ExtractedDocument, ExtractedDocument]:
        """Extract both uploads concurrently (non-strict).

        Both extractions run to completion before the first failure, in
        argument order, is raised.
        """
        results = await asyncio.gather(
            self.extractor.extract(job_description_file),
            self.extractor.extract(cv_file),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result
        job, cv = results
        return job, cv

    async def upload_and_analyze(
        self, job_description_file: str, cv_file: str
    ) -> AnalysisResponse:
        """Analyze two base64-encoded PDFs."""
        try:
            job, cv = await self.extract_documents(job_description_file, cv_file)
            outcome = await self.orchestrator.run(job, cv)
        except AnalyzerError as exc:
            logger.error("Upload and analysis error: %s", exc)
            raise AnalysisFailedError(f"Upload and analysis failed: {exc}") from exc
        return _response(outcome)
