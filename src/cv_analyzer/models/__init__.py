"""Data models for the CV analysis pipeline."""

from cv_analyzer.models.analysis import (
    Alignment,
    AnalysisOutcome,
    AnalysisResponse,
    AnalysisResult,
    AnalysisStatus,
)
from cv_analyzer.models.document import ExtractedDocument

__all__ = [
    "Alignment",
    "AnalysisOutcome",
    "AnalysisResponse",
    "AnalysisResult",
    "AnalysisStatus",
    "ExtractedDocument",
]
