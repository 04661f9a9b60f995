"""Validation of job description / CV text before any external call.

Checks run in a fixed order and stop at the first failure, since later
messages assume the earlier checks hold.
"""

from __future__ import annotations

from cv_analyzer.errors import ValidationError

MIN_JOB_DESCRIPTION_CHARS = 50
MIN_CV_CHARS = 100
MAX_DOCUMENT_CHARS = 50_000
MIN_JOB_DESCRIPTION_WORDS = 10
MIN_CV_WORDS = 20


def validate_documents(job_description_text: object, cv_text: object) -> None:
    """Raise ValidationError if either document is unusable for analysis."""
    docs = (
        ("Job description", job_description_text, MIN_JOB_DESCRIPTION_CHARS, MIN_JOB_DESCRIPTION_WORDS),
        ("CV", cv_text, MIN_CV_CHARS, MIN_CV_WORDS),
    )

    # 1. Present and textual
    for label, value, _, _ in docs:
        if value is None:
            raise ValidationError(f"{label} is required")
        if not isinstance(value, str):
            raise ValidationError(
                f"{label} must be text, got {type(value).__name__}"
            )

    # 2. Non-empty after trimming
    for label, value, _, _ in docs:
        if not value.strip():
            raise ValidationError(f"{label} is empty")

    # 3. Minimum length
    for label, value, min_chars, _ in docs:
        length = len(value.strip())
        if length < min_chars:
            raise ValidationError(
                f"{label} is too short ({length} characters); "
                f"at least {min_chars} characters are required"
            )

    # 4. Maximum length
    for label, value, _, _ in docs:
        if len(value) > MAX_DOCUMENT_CHARS:
            raise ValidationError(
                f"{label} is too long ({len(value)} characters); "
                f"the maximum is {MAX_DOCUMENT_CHARS}"
            )

    # 5. Word count
    for label, value, _, min_words in docs:
        words = len(value.split())
        if words < min_words:
            raise ValidationError(
                f"{label} has too few words ({words}); "
                f"at least {min_words} words are required"
            )
