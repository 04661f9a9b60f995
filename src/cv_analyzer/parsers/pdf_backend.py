"""Lazily initialized handle to the PDF parsing library (PyMuPDF).

The library is loaded at most once per process. Concurrent first callers
share a single initialization task, so they all observe the same outcome.
A failed initialization is cached and only retried after ``retry_after``
seconds.
"""

from __future__ import annotations

import asyncio
import logging
import time
from types import ModuleType
from typing import Callable

from cv_analyzer.errors import PdfBackendUnavailableError

logger = logging.getLogger(__name__)

DEFAULT_RETRY_AFTER = 60.0


def load_pymupdf() -> ModuleType:
    import fitz  # PyMuPDF

    return fitz


class PdfBackend:
    def __init__(
        self,
        loader: Callable[[], ModuleType] = load_pymupdf,
        retry_after: float = DEFAULT_RETRY_AFTER,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._loader = loader
        self.retry_after = retry_after
        self._clock = clock
        self._module: ModuleType | None = None
        self._failure: PdfBackendUnavailableError | None = None
        self._failed_at = 0.0
        self._pending: asyncio.Task | None = None
        self.init_count = 0

    @property
    def ready(self) -> bool:
        return self._module is not None

    async def get(self) -> ModuleType:
        """Return the loaded library, initializing it on first use."""
        if self._module is not None:
            return self._module

        if self._failure is not None:
            if self._clock() - self._failed_at < self.retry_after:
                raise self._failure
            logger.info("Retrying PDF backend initialization")

        loop = asyncio.get_running_loop()
        if self._pending is None or self._pending.get_loop() is not loop:
            self._pending = loop.create_task(self._initialize())
        return await asyncio.shield(self._pending)

    async def _initialize(self) -> ModuleType:
        self.init_count += 1
        try:
            module = await asyncio.to_thread(self._loader)
        except Exception as exc:
            logger.error("PDF backend failed to initialize", exc_info=True)
            error = PdfBackendUnavailableError(f"PDF backend unavailable: {exc}")
            error.__cause__ = exc
            self._failure = error
            self._failed_at = self._clock()
            raise error
        finally:
            self._pending = None

        logger.debug("PDF backend initialized: %s", getattr(module, "__name__", module))
        self._module = module
        self._failure = None
        return module


_shared: PdfBackend | None = None


def shared_backend(retry_after: float = DEFAULT_RETRY_AFTER) -> PdfBackend:
    """Process-wide backend used by extractors that are not given one."""
    global _shared
    if _shared is None:
        _shared = PdfBackend(retry_after=retry_after)
    return _shared
