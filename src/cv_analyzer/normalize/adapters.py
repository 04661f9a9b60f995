"""Shape adapters mapping alternate AI reply layouts onto the canonical schema.

Each adapter is a named rule that rewrites the parsed payload in place and
reports whether it fired. New reply shapes get a new adapter appended to
ADAPTERS; the normalizer never branches on shape itself.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable

from cv_analyzer.models.analysis import round_half_up

logger = logging.getLogger(__name__)

SHAPE_VERSION = 1

# alignmentScores sub-score -> canonical alignment key
ALIGNMENT_SCORE_MAP: dict[str, str] = {
    "skills": "technicalSkills",
    "experience": "experience",
    "qualifications": "education",
    "responsibilities": "softSkills",
}

SNAKE_CASE_KEYS: dict[str, str] = {
    "overall_score": "overallScore",
    "key_matches": "keyMatches",
    "missing_requirements": "missingRequirements",
    "alignment_scores": "alignmentScores",
}

SNAKE_CASE_ALIGNMENT_KEYS: dict[str, str] = {
    "technical_skills": "technicalSkills",
    "soft_skills": "softSkills",
}


@dataclass(frozen=True)
class ShapeAdapter:
    name: str
    version: int
    apply: Callable[[dict], bool]


def _as_number(value: object) -> float | None:
    """Numbers and numeric strings as float; anything else as None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
        return number if math.isfinite(number) else None
    return None


def _fraction_to_percent(value: object) -> int:
    number = _as_number(value)
    return round_half_up(number * 100) if number is not None else 0


def adapt_snake_case_keys(data: dict) -> bool:
    fired = False
    for snake, camel in SNAKE_CASE_KEYS.items():
        if snake in data and camel not in data:
            data[camel] = data.pop(snake)
            fired = True
    alignment = data.get("alignment")
    if isinstance(alignment, dict):
        for snake, camel in SNAKE_CASE_ALIGNMENT_KEYS.items():
            if snake in alignment and camel not in alignment:
                alignment[camel] = alignment.pop(snake)
                fired = True
    return fired


def adapt_alignment_scores(data: dict) -> bool:
    """alignmentScores {skills, experience, qualifications, responsibilities}
    given as 0-1 fractions -> alignment percentages."""
    scores = data.get("alignmentScores")
    if not isinstance(scores, dict) or data.get("alignment") is not None:
        return False
    data["alignment"] = {
        target: _fraction_to_percent(scores.get(source, 0))
        for source, target in ALIGNMENT_SCORE_MAP.items()
    }
    del data["alignmentScores"]
    return True


def adapt_fractional_overall_score(data: dict) -> bool:
    score = _as_number(data.get("overallScore"))
    if score is None or score > 1:
        return False
    data["overallScore"] = round_half_up(score * 100)
    return True


ADAPTERS: tuple[ShapeAdapter, ...] = (
    ShapeAdapter("snake_case_keys", SHAPE_VERSION, adapt_snake_case_keys),
    ShapeAdapter("alignment_scores_fraction", SHAPE_VERSION, adapt_alignment_scores),
    ShapeAdapter("overall_score_fraction", SHAPE_VERSION, adapt_fractional_overall_score),
)


def apply_adapters(
    data: dict, adapters: tuple[ShapeAdapter, ...] = ADAPTERS
) -> list[str]:
    """Run every adapter over ``data`` in order; return the names that fired."""
    applied = []
    for adapter in adapters:
        if adapter.apply(data):
            logger.debug("Applied shape adapter %s (v%d)", adapter.name, adapter.version)
            applied.append(adapter.name)
    return applied
