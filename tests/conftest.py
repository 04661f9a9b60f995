"""Shared test fixtures."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock

import pytest

from cv_analyzer.clients.llm_client import LLMClient, LLMResponse
from cv_analyzer.config import ExtractionConfig
from cv_analyzer.parsers.pdf_backend import PdfBackend


@pytest.fixture
def fast_extraction_config() -> ExtractionConfig:
    return ExtractionConfig(timeout_seconds=5, backoff_min=0, backoff_max=0)


@pytest.fixture
def pymupdf_backend() -> PdfBackend:
    """A private (non-shared) backend loading the real PyMuPDF."""
    return PdfBackend()


@pytest.fixture
def sample_jd_text() -> str:
    return """Senior Backend Engineer (Python)

We are looking for a backend engineer to design and operate our payment APIs.

Requirements:
- 5+ years building web services in Python (FastAPI or Django)
- Experience with PostgreSQL, Redis and message queues such as Kafka
- Familiarity with Docker, Kubernetes and AWS
- Strong communication skills and experience mentoring junior engineers
"""


@pytest.fixture
def sample_cv_text() -> str:
    return """Jane Doe - Backend Developer
jane@example.com | +1 555 0100

Experience:
- Acme Payments (2019 - present), Backend Developer
  - Built FastAPI services handling 2M requests per day
  - Reduced PostgreSQL query latency by 40% through indexing
  - Introduced Redis caching and Kafka consumers for settlement jobs
- Startup Co (2016 - 2019), Junior Developer
  - Developed Django REST APIs and maintained AWS EC2 infrastructure

Education:
- BSc Computer Science, State University (2012 - 2016)

Skills: Python, FastAPI, Django, PostgreSQL, Redis, Kafka, Docker, AWS
"""


@pytest.fixture
def well_formed_analysis() -> dict:
    return {
        "overallScore": 82,
        "strengths": ["Solid Python backend experience", "Hands-on Kafka and Redis"],
        "weaknesses": ["No Kubernetes experience"],
        "alignment": {
            "technicalSkills": 85,
            "experience": 80,
            "education": 75,
            "softSkills": 70,
        },
        "recommendations": ["Gain Kubernetes exposure"],
        "summary": "Strong backend candidate with minor infrastructure gaps.",
        "keyMatches": ["Python", "PostgreSQL", "Kafka"],
        "missingRequirements": ["Kubernetes", "Mentoring experience"],
    }


@pytest.fixture
def mock_llm_client(well_formed_analysis) -> LLMClient:
    """Create a mock LLM client replying with a well-formed analysis."""
    client = AsyncMock(spec=LLMClient)
    text = json.dumps(well_formed_analysis)
    client.invoke = AsyncMock(return_value=text)
    client.generate = AsyncMock(
        return_value=LLMResponse(text=text, input_tokens=100, output_tokens=50)
    )
    client.get_token_summary.return_value = {"input": 100, "output": 50, "calls": []}
    return client
