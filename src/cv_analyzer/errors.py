"""Exception hierarchy shared by the extraction and analysis pipeline."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    CONFIGURATION = "configuration"
    BACKEND_UNAVAILABLE = "backend_unavailable"
    PARSE = "parse"
    EXTRACTION_TIMEOUT = "extraction_timeout"
    EMPTY_DOCUMENT = "empty_document"
    NETWORK = "network"
    AUTH = "auth"
    BAD_REQUEST = "bad_request"
    NOT_FOUND = "not_found"
    RATE_LIMIT = "rate_limit"
    SERVICE_UNAVAILABLE = "service_unavailable"
    MALFORMED_RESPONSE = "malformed_response"
    TIMEOUT = "timeout"
    ANALYSIS_FAILED = "analysis_failed"
    UNKNOWN = "unknown"


class ErrorRecord(BaseModel):
    """Serializable description of a failure, with its cause chain."""

    kind: ErrorKind
    message: str
    http_status: int | None = None
    cause: ErrorRecord | None = None


class AnalyzerError(Exception):
    """Base class for all errors raised by cv_analyzer."""

    kind: ErrorKind = ErrorKind.UNKNOWN

    def __init__(self, message: str, *, http_status: int | None = None):
        super().__init__(message)
        self.message = message
        self.http_status = http_status

    def to_record(self) -> ErrorRecord:
        cause = self.__cause__
        return ErrorRecord(
            kind=self.kind,
            message=self.message,
            http_status=self.http_status,
            cause=_record_for(cause) if cause is not None else None,
        )


def _record_for(exc: BaseException) -> ErrorRecord:
    if isinstance(exc, AnalyzerError):
        return exc.to_record()
    cause = exc.__cause__
    return ErrorRecord(
        kind=ErrorKind.UNKNOWN,
        message=str(exc) or type(exc).__name__,
        cause=_record_for(cause) if cause is not None else None,
    )


class ValidationError(AnalyzerError):
    """Caller-supplied input is malformed. Always surfaced."""

    kind = ErrorKind.VALIDATION


class ConfigurationError(AnalyzerError):
    kind = ErrorKind.CONFIGURATION


# --- Extraction -------------------------------------------------------------


class ExtractionError(AnalyzerError):
    """Text could not be extracted from a structurally valid document."""

    kind = ErrorKind.PARSE


class PdfBackendUnavailableError(ExtractionError):
    kind = ErrorKind.BACKEND_UNAVAILABLE


class PdfParseError(ExtractionError):
    kind = ErrorKind.PARSE


class ExtractionTimeoutError(ExtractionError):
    kind = ErrorKind.EXTRACTION_TIMEOUT


class EmptyDocumentError(ExtractionError):
    kind = ErrorKind.EMPTY_DOCUMENT


# --- Analysis client --------------------------------------------------------


class AnalysisClientError(AnalyzerError):
    """The generative-text service call failed."""


class NetworkError(AnalysisClientError):
    kind = ErrorKind.NETWORK


class AuthError(AnalysisClientError):
    kind = ErrorKind.AUTH


class BadRequestError(AnalysisClientError):
    kind = ErrorKind.BAD_REQUEST


class NotFoundError(AnalysisClientError):
    kind = ErrorKind.NOT_FOUND


class RateLimitError(AnalysisClientError):
    kind = ErrorKind.RATE_LIMIT


class ServiceUnavailableError(AnalysisClientError):
    kind = ErrorKind.SERVICE_UNAVAILABLE


class MalformedResponseError(AnalysisClientError):
    kind = ErrorKind.MALFORMED_RESPONSE


class AnalysisTimeoutError(AnalysisClientError):
    kind = ErrorKind.TIMEOUT


# --- Boundary ---------------------------------------------------------------


class AnalysisFailedError(AnalyzerError):
    """Reportable failure raised at the service boundary."""

    kind = ErrorKind.ANALYSIS_FAILED
