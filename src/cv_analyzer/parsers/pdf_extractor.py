"""Extract plain text from base64-encoded PDF uploads.

Input validation failures are always raised. Everything that goes wrong
after that (backend unavailable, parser errors, timeouts, documents with no
extractable text) degrades to clearly labelled placeholder text unless the
caller asks for strict mode.
"""

from __future__ import annotations

import asyncio
import base64
import binascii
import logging
import re
from types import ModuleType

from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from cv_analyzer.config import ExtractionConfig
from cv_analyzer.errors import (
    AnalyzerError,
    EmptyDocumentError,
    ExtractionError,
    ExtractionTimeoutError,
    PdfParseError,
    ValidationError,
)
from cv_analyzer.models.document import ExtractedDocument
from cv_analyzer.parsers.pdf_backend import PdfBackend, shared_backend
from cv_analyzer.parsers.text_cleaner import clean_text

logger = logging.getLogger(__name__)

PDF_MAGIC = b"%PDF"

FALLBACK_TEXT = (
    "[PLACEHOLDER] Text could not be extracted from the uploaded PDF document. "
    "This placeholder stands in for the real content so that the analysis can "
    "still complete; results based on it are sample data only."
)

_DATA_URL_PREFIX = re.compile(r"^data:[\w.+-]+/[\w.+-]+;base64,", re.IGNORECASE)
_BASE64_BODY = re.compile(r"^[A-Za-z0-9+/]*={0,2}$")
_WHITESPACE = re.compile(r"\s+")

_METADATA_KEYS = ("format", "title", "author", "subject", "creator", "producer", "creationDate", "modDate")


def decode_document(encoded: object, max_bytes: int) -> bytes:
    """Strip an optional data-URL prefix and decode base64 into bytes."""
    if not isinstance(encoded, str):
        raise ValidationError(
            f"Document must be a base64 string, got {type(encoded).__name__}"
        )

    payload = _DATA_URL_PREFIX.sub("", encoded.strip(), count=1)
    payload = _WHITESPACE.sub("", payload)
    if not payload:
        raise ValidationError("Document is empty")
    if not _BASE64_BODY.match(payload) or len(payload) % 4 == 1:
        raise ValidationError("Document is not valid base64 data")

    estimated = len(payload) * 3 // 4 - payload.count("=")
    if estimated > max_bytes:
        raise ValidationError(
            f"Document is too large ({estimated / (1024 * 1024):.1f}MB); "
            f"the maximum is {max_bytes / (1024 * 1024):.0f}MB"
        )

    try:
        return base64.b64decode(payload + "=" * (-len(payload) % 4), validate=True)
    except binascii.Error as exc:
        raise ValidationError("Document is not valid base64 data") from exc


def check_signature(data: bytes) -> None:
    if data[:4] != PDF_MAGIC:
        raise ValidationError("Document is not a valid PDF (missing %PDF header)")


def validate_upload(
    size_bytes: int, content_type: str, config: ExtractionConfig | None = None
) -> None:
    """Reject uploads that are too large or of a type we do not accept."""
    config = config or ExtractionConfig()
    if size_bytes > config.max_file_size_bytes:
        raise ValidationError(
            f"File size exceeds maximum allowed size of {config.max_file_size_mb:g}MB"
        )
    if content_type not in config.allowed_types:
        raise ValidationError(
            f"File type {content_type} is not allowed. "
            f"Allowed types: {', '.join(config.allowed_types)}"
        )


def _read_pages(fitz: ModuleType, data: bytes) -> tuple[str, int]:
    doc = fitz.open(stream=data, filetype="pdf")
    try:
        if doc.needs_pass:
            raise EmptyDocumentError("PDF is encrypted; no text can be extracted")
        pages = [page.get_text() for page in doc]
        return "\n".join(pages), doc.page_count
    finally:
        doc.close()


def _read_metadata(fitz: ModuleType, data: bytes) -> tuple[int, dict[str, str]]:
    doc = fitz.open(stream=data, filetype="pdf")
    try:
        raw = doc.metadata or {}
        metadata = {key: str(raw[key]) for key in _METADATA_KEYS if raw.get(key)}
        return doc.page_count, metadata
    finally:
        doc.close()


class PdfExtractor:
    """Base64 PDF -> text, with timeout, retry and fallback content."""

    def __init__(
        self,
        config: ExtractionConfig | None = None,
        backend: PdfBackend | None = None,
    ):
        self.config = config or ExtractionConfig()
        self.backend = backend or shared_backend(self.config.init_retry_seconds)

    async def extract_text(self, encoded_document: str, *, strict: bool = False) -> str:
        return (await self.extract(encoded_document, strict=strict)).text

    async def extract(
        self, encoded_document: str, *, strict: bool = False
    ) -> ExtractedDocument:
        """Extract text from a base64 (optionally data-URL) PDF.

        Args:
            encoded_document: base64 payload, optionally prefixed with
                ``data:application/pdf;base64,``.
            strict: raise extraction failures instead of returning
                placeholder text.

        Raises:
            ValidationError: the payload is not usable base64 or is too large
                (always), or is not a PDF (strict mode only).
            ExtractionError: extraction failed (strict mode only).
        """
        data = decode_document(encoded_document, self.config.max_file_size_bytes)
        logger.debug("Decoded document: %d bytes", len(data))

        try:
            check_signature(data)
            fitz = await self.backend.get()
            text, page_count = await self._extract_with_retry(fitz, data)
            text = clean_text(text)
            if not text:
                raise EmptyDocumentError(
                    "PDF contains no extractable text (image-only or encrypted?)"
                )
        except AnalyzerError as exc:
            if strict:
                raise
            logger.warning("PDF extraction failed (%s): %s; using placeholder text", exc.kind.value, exc)
            return ExtractedDocument(
                text=FALLBACK_TEXT, is_fallback=True, failure=exc.to_record()
            )

        logger.info("Extracted %d characters from %d page(s)", len(text), page_count)
        return ExtractedDocument(text=text, page_count=page_count)

    async def read_metadata(self, encoded_document: str) -> ExtractedDocument:
        """Return page count and document metadata, without the text."""
        data = decode_document(encoded_document, self.config.max_file_size_bytes)
        check_signature(data)
        fitz = await self.backend.get()
        page_count, metadata = await self._run_parser(_read_metadata, fitz, data)
        return ExtractedDocument(text="", page_count=page_count, metadata=metadata)

    async def _extract_with_retry(self, fitz: ModuleType, data: bytes) -> tuple[str, int]:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.config.max_attempts),
            wait=wait_exponential(min=self.config.backoff_min, max=self.config.backoff_max),
            retry=retry_if_exception_type((PdfParseError, ExtractionTimeoutError)),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                return await self._run_parser(_read_pages, fitz, data)

    async def _run_parser(self, func, fitz: ModuleType, data: bytes):
        try:
            return await asyncio.wait_for(
                asyncio.to_thread(func, fitz, data),
                timeout=self.config.timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            raise ExtractionTimeoutError(
                f"PDF parsing timed out after {self.config.timeout_seconds:g}s"
            ) from exc
        except ExtractionError:
            raise
        except Exception as exc:
            raise PdfParseError(f"PDF parsing failed: {exc}") from exc


_default_extractor: PdfExtractor | None = None


async def parse_pdf(encoded_document: str, *, strict: bool = False) -> str:
    """Extract text with a process-wide default extractor."""
    global _default_extractor
    if _default_extractor is None:
        _default_extractor = PdfExtractor()
    return await _default_extractor.extract_text(encoded_document, strict=strict)
