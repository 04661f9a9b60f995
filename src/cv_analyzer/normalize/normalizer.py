"""Turn a free-form AI reply into a canonical AnalysisResult.

Normalization never raises: a reply that cannot be parsed becomes a degraded
result carrying the raw reply as its summary.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import pydantic

from cv_analyzer.models.analysis import Alignment, AnalysisResult
from cv_analyzer.normalize.adapters import ADAPTERS, ShapeAdapter, apply_adapters
from cv_analyzer.utils.json_parser import extract_json

logger = logging.getLogger(__name__)

CANONICAL_KEYS = tuple(
    f.alias or name for name, f in AnalysisResult.model_fields.items()
)


@dataclass
class NormalizedResponse:
    result: AnalysisResult
    parsed: bool
    applied_rules: list[str] = field(default_factory=list)
    missing_keys: list[str] = field(default_factory=list)


def unparsed_result(raw_text: str) -> AnalysisResult:
    """Neutral placeholder result that keeps the AI's prose for review."""
    return AnalysisResult(
        overall_score=75,
        strengths=["AI analysis completed - see summary for details"],
        weaknesses=["AI response format could not be parsed"],
        alignment=Alignment(
            technical_skills=70,
            experience=75,
            education=70,
            soft_skills=80,
        ),
        recommendations=["Review the AI analysis in the summary section"],
        summary=raw_text,
        key_matches=["AI analysis completed"],
        missing_requirements=["AI response formatting"],
    )


class ResponseNormalizer:
    def __init__(self, adapters: tuple[ShapeAdapter, ...] = ADAPTERS):
        self.adapters = adapters

    def normalize(self, raw_text: str) -> AnalysisResult:
        return self.normalize_detailed(raw_text).result

    def normalize_detailed(self, raw_text: str) -> NormalizedResponse:
        if not isinstance(raw_text, str):
            raw_text = "" if raw_text is None else str(raw_text)

        try:
            data = extract_json(raw_text)
        except ValueError:
            logger.info("AI response is not structured JSON, using unparsed result")
            return NormalizedResponse(result=unparsed_result(raw_text), parsed=False)

        applied = apply_adapters(data, self.adapters)
        missing = [key for key in CANONICAL_KEYS if data.get(key) is None]
        if missing:
            logger.warning("AI response is missing fields: %s", ", ".join(missing))

        try:
            result = AnalysisResult.model_validate(data)
        except pydantic.ValidationError as exc:
            logger.warning(
                "AI response JSON does not match the result schema (%d errors)",
                exc.error_count(),
            )
            return NormalizedResponse(result=unparsed_result(raw_text), parsed=False)

        return NormalizedResponse(
            result=result, parsed=True, applied_rules=applied, missing_keys=missing
        )


_default_normalizer = ResponseNormalizer()


def normalize(raw_text: str) -> AnalysisResult:
    """Normalize an AI reply with the default adapters."""
    return _default_normalizer.normalize(raw_text)
