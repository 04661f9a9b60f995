"""Job description / CV comparison with a generative AI service."""

from cv_analyzer.models import AnalysisOutcome, AnalysisResult, ExtractedDocument
from cv_analyzer.normalize.normalizer import normalize
from cv_analyzer.parsers.pdf_extractor import PdfExtractor, parse_pdf
from cv_analyzer.pipeline.orchestrator import AnalysisOrchestrator
from cv_analyzer.service import AnalysisService
from cv_analyzer.utils.input_validator import validate_documents

__version__ = "0.1.0"

__all__ = [
    "AnalysisOrchestrator",
    "AnalysisOutcome",
    "AnalysisResult",
    "AnalysisService",
    "ExtractedDocument",
    "PdfExtractor",
    "normalize",
    "parse_pdf",
    "validate_documents",
]
