"""Pydantic model for text extracted from an uploaded document."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from cv_analyzer.errors import ErrorRecord


class ExtractedDocument(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    text: str
    page_count: int | None = None
    metadata: dict[str, str] | None = None
    is_fallback: bool = False  # text is placeholder content, not the document's
    failure: ErrorRecord | None = None  # why the fallback was used
