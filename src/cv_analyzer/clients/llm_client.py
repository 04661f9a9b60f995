"""Gemini generateContent wrapper with an explicit error taxonomy.

Makes exactly one request per call. AI calls are costly and rate limited,
so failures are classified and raised for the caller to handle, never
retried here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from cv_analyzer.config import AIConfig
from cv_analyzer.errors import (
    AnalysisClientError,
    AnalysisTimeoutError,
    AuthError,
    BadRequestError,
    ConfigurationError,
    MalformedResponseError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    ServiceUnavailableError,
)

logger = logging.getLogger(__name__)

SAFETY_CATEGORIES = (
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
)

_STATUS_ERRORS: dict[int, type[AnalysisClientError]] = {
    400: BadRequestError,
    401: AuthError,
    403: AuthError,
    404: NotFoundError,
    429: RateLimitError,
}


@dataclass
class LLMResponse:
    """Response from the LLM including usage metadata."""

    text: str
    input_tokens: int
    output_tokens: int


def error_for_status(status: int, detail: str = "") -> AnalysisClientError:
    """Map a non-2xx HTTP status onto the client error taxonomy."""
    if status in _STATUS_ERRORS:
        cls = _STATUS_ERRORS[status]
    elif 400 <= status < 500:
        cls = BadRequestError
    else:
        cls = ServiceUnavailableError
    message = f"AI service returned HTTP {status}"
    if detail:
        message = f"{message}: {detail[:200]}"
    return cls(message, http_status=status)


class LLMClient:
    """Async client for a Gemini-style generateContent endpoint."""

    def __init__(
        self,
        config: AIConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not config.api_url:
            raise ConfigurationError(
                "AI endpoint URL required. Set GEMINI_API_URL or ai.api_url."
            )
        if not config.api_key:
            raise ConfigurationError(
                "AI API key required. Set GEMINI_API_KEY or ai.api_key."
            )
        self.config = config
        self._transport = transport
        self._token_log: list[tuple[str, int, int]] = []  # (model, input_tokens, output_tokens)

    def _build_payload(self, prompt: str) -> dict:
        return {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": self.config.temperature,
                "topK": self.config.top_k,
                "topP": self.config.top_p,
                "maxOutputTokens": self.config.max_output_tokens,
            },
            "safetySettings": [
                {"category": category, "threshold": "BLOCK_MEDIUM_AND_ABOVE"}
                for category in SAFETY_CATEGORIES
            ],
        }

    async def _post(self, payload: dict) -> httpx.Response:
        async with httpx.AsyncClient(
            timeout=self.config.timeout, transport=self._transport
        ) as client:
            try:
                return await client.post(
                    self.config.api_url,
                    headers={
                        "Content-Type": "application/json",
                        "x-goog-api-key": self.config.api_key,
                    },
                    json=payload,
                )
            except httpx.TimeoutException as exc:
                raise AnalysisTimeoutError(
                    f"AI request timed out after {self.config.timeout:g}s"
                ) from exc
            except (httpx.HTTPError, httpx.InvalidURL) as exc:
                raise NetworkError(f"Could not reach AI service: {exc}") from exc

    async def generate(self, prompt: str) -> LLMResponse:
        """Send a prompt and return the generated text with usage."""
        logger.debug("LLM call: model=%s, prompt=%d chars", self.config.model, len(prompt))
        response = await self._post(self._build_payload(prompt))

        if not response.is_success:
            error = error_for_status(response.status_code, response.text)
            logger.error("LLM call failed: %s", error)
            raise error

        try:
            data = response.json()
        except ValueError as exc:
            raise MalformedResponseError(
                "AI service returned a body that is not JSON",
                http_status=response.status_code,
            ) from exc

        text = _candidate_text(data)
        if text is None:
            raise MalformedResponseError(
                "AI service response has no candidates[0].content.parts[0].text",
                http_status=response.status_code,
            )

        usage = data.get("usageMetadata")
        input_tokens = _token_count(usage, "promptTokenCount")
        output_tokens = _token_count(usage, "candidatesTokenCount")
        logger.debug("LLM response: %d input, %d output tokens", input_tokens, output_tokens)
        self._token_log.append((self.config.model, input_tokens, output_tokens))
        return LLMResponse(text=text, input_tokens=input_tokens, output_tokens=output_tokens)

    async def invoke(self, prompt: str) -> str:
        """Send a prompt and return only the raw generated text."""
        return (await self.generate(prompt)).text

    def get_token_summary(self) -> dict:
        """Return accumulated token usage and reset the log."""
        summary = {
            "input": sum(t[1] for t in self._token_log),
            "output": sum(t[2] for t in self._token_log),
            "calls": list(self._token_log),
        }
        self._token_log.clear()
        return summary


def _candidate_text(data: object) -> str | None:
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) else None


def _token_count(usage: object, key: str) -> int:
    if not isinstance(usage, dict):
        return 0
    value = usage.get(key)
    if isinstance(value, bool):
        return 0
    try:
        return max(0, int(value))
    except (TypeError, ValueError):
        return 0
