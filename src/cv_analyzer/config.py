"""Application configuration loaded from config.yaml and the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

DEFAULT_API_URL = (
    "https://generativelanguage.googleapis.com/v1beta/models/"
    "gemini-2.0-flash:generateContent"
)


@dataclass(frozen=True)
class AIConfig:
    api_url: str = DEFAULT_API_URL
    api_key: str = ""
    model: str = "gemini-2.0-flash"
    timeout: float = 60
    temperature: float = 0.7
    top_k: int = 40
    top_p: float = 0.95
    max_output_tokens: int = 2048

    def __post_init__(self) -> None:
        if not 1 <= self.timeout <= 600:
            raise ValueError(f"ai.timeout must be between 1 and 600, got {self.timeout}")
        if not 0.0 <= self.temperature <= 2.0:
            raise ValueError(f"ai.temperature must be between 0 and 2, got {self.temperature}")
        if not 0.0 < self.top_p <= 1.0:
            raise ValueError(f"ai.top_p must be in (0, 1], got {self.top_p}")
        if self.top_k < 1:
            raise ValueError(f"ai.top_k must be positive, got {self.top_k}")
        if self.max_output_tokens < 1:
            raise ValueError(
                f"ai.max_output_tokens must be positive, got {self.max_output_tokens}"
            )


@dataclass(frozen=True)
class ExtractionConfig:
    max_file_size_mb: float = 50
    timeout_seconds: float = 30
    max_attempts: int = 2
    backoff_min: float = 0.5
    backoff_max: float = 4
    init_retry_seconds: float = 60
    allowed_types: tuple[str, ...] = ("application/pdf",)

    def __post_init__(self) -> None:
        if self.max_file_size_mb <= 0:
            raise ValueError(
                f"extraction.max_file_size_mb must be positive, got {self.max_file_size_mb}"
            )
        if not 0 < self.timeout_seconds <= 600:
            raise ValueError(
                f"extraction.timeout_seconds must be in (0, 600], got {self.timeout_seconds}"
            )
        if not 1 <= self.max_attempts <= 5:
            raise ValueError(
                f"extraction.max_attempts must be between 1 and 5, got {self.max_attempts}"
            )
        if self.backoff_min < 0 or self.backoff_max < self.backoff_min:
            raise ValueError("extraction.backoff_min/backoff_max must satisfy 0 <= min <= max")
        if self.init_retry_seconds < 0:
            raise ValueError("extraction.init_retry_seconds must not be negative")
        # YAML gives lists; keep the dataclass hashable
        object.__setattr__(self, "allowed_types", tuple(self.allowed_types))

    @property
    def max_file_size_bytes(self) -> int:
        return int(self.max_file_size_mb * 1024 * 1024)


@dataclass(frozen=True)
class AppConfig:
    ai: AIConfig = field(default_factory=AIConfig)
    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)


# env var -> (section, key, converter)
_ENV_OVERRIDES: dict[str, tuple[str, str, type]] = {
    "GEMINI_API_URL": ("ai", "api_url", str),
    "GEMINI_API_KEY": ("ai", "api_key", str),
    "AI_MODEL": ("ai", "model", str),
    "AI_TIMEOUT_SECONDS": ("ai", "timeout", float),
    "MAX_FILE_SIZE_MB": ("extraction", "max_file_size_mb", float),
    "EXTRACTION_TIMEOUT_SECONDS": ("extraction", "timeout_seconds", float),
}


def _apply_env(raw: dict) -> dict:
    raw = {section: dict(raw.get(section) or {}) for section in ("ai", "extraction")}
    for var, (section, key, convert) in _ENV_OVERRIDES.items():
        value = os.environ.get(var)
        if value:
            raw[section][key] = convert(value.strip())

    allowed = os.environ.get("ALLOWED_FILE_TYPES")
    if allowed:
        raw["extraction"]["allowed_types"] = tuple(
            t.strip() for t in allowed.split(",") if t.strip()
        )
    return raw


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from YAML file and environment, falling back to defaults."""
    if path is None:
        candidates = [
            Path.cwd() / "config.yaml",
            Path(__file__).resolve().parent.parent.parent / "config.yaml",
        ]
        for c in candidates:
            if c.exists():
                path = c
                break

    raw: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            raw = yaml.safe_load(p.read_text()) or {}

    raw = _apply_env(raw)

    return AppConfig(
        ai=AIConfig(**raw["ai"]),
        extraction=ExtractionConfig(**raw["extraction"]),
    )
