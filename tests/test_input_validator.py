"""Tests for job description / CV input validation."""

import pytest

from cv_analyzer.errors import ValidationError
from cv_analyzer.utils.input_validator import (
    MAX_DOCUMENT_CHARS,
    MIN_CV_CHARS,
    MIN_JOB_DESCRIPTION_CHARS,
    validate_documents,
)


def _text(length: int, word: str = "word") -> str:
    """Text of exactly ``length`` chars made of space-separated words."""
    unit = word + " "
    return (unit * (length // len(unit) + 1))[:length].rstrip().ljust(length, "x")


class TestValidateDocuments:
    def test_valid_documents_pass(self, sample_jd_text, sample_cv_text):
        validate_documents(sample_jd_text, sample_cv_text)

    @pytest.mark.parametrize("jd, cv", [(None, "cv"), ("jd", None)])
    def test_missing_value_raises(self, jd, cv):
        with pytest.raises(ValidationError, match="is required"):
            validate_documents(jd, cv)

    def test_non_string_raises(self, sample_cv_text):
        with pytest.raises(ValidationError, match="must be text, got int"):
            validate_documents(12345, sample_cv_text)

    @pytest.mark.parametrize("blank", ["", "   ", "\n\t  \n"])
    def test_whitespace_only_raises(self, blank, sample_cv_text):
        with pytest.raises(ValidationError, match="Job description is empty"):
            validate_documents(blank, sample_cv_text)

    def test_empty_cv_reported_after_type_checks(self, sample_jd_text):
        with pytest.raises(ValidationError, match="CV is empty"):
            validate_documents(sample_jd_text, "  ")

    def test_type_check_precedes_emptiness(self):
        """A non-string CV is reported even though the job description is empty."""
        with pytest.raises(ValidationError, match="CV must be text"):
            validate_documents("", ["not", "text"])

    def test_job_description_length_boundary(self, sample_cv_text):
        too_short = _text(MIN_JOB_DESCRIPTION_CHARS - 1)
        just_enough = _text(MIN_JOB_DESCRIPTION_CHARS)
        assert len(too_short) == 49 and len(just_enough) == 50

        with pytest.raises(ValidationError, match="Job description is too short"):
            validate_documents(too_short, sample_cv_text)
        validate_documents(just_enough, sample_cv_text)

    def test_cv_length_boundary(self, sample_jd_text):
        too_short = _text(MIN_CV_CHARS - 1)
        just_enough = _text(MIN_CV_CHARS)
        assert len(too_short) == 99 and len(just_enough) == 100

        with pytest.raises(ValidationError, match="CV is too short"):
            validate_documents(sample_jd_text, too_short)
        validate_documents(sample_jd_text, just_enough)

    def test_length_measured_after_trimming(self, sample_cv_text):
        padded = "   " + _text(MIN_JOB_DESCRIPTION_CHARS - 1) + "   "
        with pytest.raises(ValidationError, match="too short"):
            validate_documents(padded, sample_cv_text)

    def test_too_long_raises(self, sample_jd_text):
        with pytest.raises(ValidationError, match="CV is too long"):
            validate_documents(sample_jd_text, _text(MAX_DOCUMENT_CHARS + 1))

    def test_too_few_words_in_job_description(self, sample_cv_text):
        long_words = " ".join(["requirements"] * 9)  # 9 words, > 50 chars
        with pytest.raises(ValidationError, match="Job description has too few words"):
            validate_documents(long_words, sample_cv_text)

    def test_too_few_words_in_cv(self, sample_jd_text):
        long_words = " ".join(["experienced"] * 19)  # 19 words, > 100 chars
        with pytest.raises(ValidationError, match="CV has too few words"):
            validate_documents(sample_jd_text, long_words)
