"""Pydantic models for the job/CV comparison result."""

from __future__ import annotations

import math
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from cv_analyzer.errors import ErrorRecord


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def to_score(value: Any) -> Any:
    """Round a numeric score to an int clamped into 0-100.

    Non-numeric values are returned untouched so pydantic can reject them.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return value
    if isinstance(value, (int, float)):
        if isinstance(value, float) and not math.isfinite(value):
            return value
        return max(0, min(100, round_half_up(value)))
    return value


def _without_nulls(data: Any) -> Any:
    """Treat explicit nulls as missing so field defaults apply."""
    if isinstance(data, dict):
        return {key: value for key, value in data.items() if value is not None}
    return data


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Alignment(_CamelModel):
    technical_skills: int = 0  # 0-100
    experience: int = 0  # 0-100
    education: int = 0  # 0-100
    soft_skills: int = 0  # 0-100

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        return _without_nulls(data)

    @field_validator("*", mode="before")
    @classmethod
    def coerce_scores(cls, value: Any) -> Any:
        return to_score(value)


class AnalysisResult(_CamelModel):
    overall_score: int = 0  # 0-100
    strengths: list[str] = []
    weaknesses: list[str] = []
    alignment: Alignment = Field(default_factory=Alignment)
    recommendations: list[str] = []
    summary: str = ""
    key_matches: list[str] = []
    missing_requirements: list[str] = []

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data: Any) -> Any:
        return _without_nulls(data)

    @field_validator("overall_score", mode="before")
    @classmethod
    def coerce_score(cls, value: Any) -> Any:
        return to_score(value)

    def to_payload(self) -> dict:
        """Dump in the camelCase shape consumed by the UI."""
        return self.model_dump(by_alias=True)


class AnalysisStatus(str, Enum):
    ANALYZED = "analyzed"  # AI reply parsed into the schema
    UNPARSED = "unparsed"  # AI replied, but not in a parseable shape
    FALLBACK = "fallback"  # canned result; AI not called or failed


class AnalysisOutcome(BaseModel):
    """Result of one orchestrator run, tagged with how it was produced."""

    status: AnalysisStatus
    result: AnalysisResult
    error: ErrorRecord | None = None

    @property
    def is_fallback(self) -> bool:
        return self.status is AnalysisStatus.FALLBACK


class AnalysisResponse(_CamelModel):
    """Envelope returned by the service boundary."""

    success: bool
    status: AnalysisStatus
    data: AnalysisResult
