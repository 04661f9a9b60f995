"""Document Analyst - compares a job description with a CV via the LLM."""

from __future__ import annotations

from cv_analyzer.clients.llm_client import LLMClient
from cv_analyzer.normalize.normalizer import NormalizedResponse, ResponseNormalizer

ANALYSIS_PROMPT = """\
You are an expert HR analyst. Compare the job description and the CV below and \
assess how well the candidate fits the role.

Job Description:
---
{job_description}
---

CV:
---
{cv}
---

Respond with JSON only, using exactly this structure:
{{
  "overallScore": 0-100,
  "strengths": ["strength 1", "strength 2"],
  "weaknesses": ["weakness 1", "weakness 2"],
  "alignment": {{
    "technicalSkills": 0-100,
    "experience": 0-100,
    "education": 0-100,
    "softSkills": 0-100
  }},
  "recommendations": ["recommendation 1", "recommendation 2"],
  "summary": "short overall assessment",
  "keyMatches": ["requirement the candidate meets"],
  "missingRequirements": ["requirement the candidate lacks"]
}}

Order every list from most to least relevant."""


def build_prompt(job_description: str, cv: str) -> str:
    return ANALYSIS_PROMPT.format(job_description=job_description, cv=cv)


class DocumentAnalyst:
    def __init__(self, llm: LLMClient, normalizer: ResponseNormalizer | None = None):
        self.llm = llm
        self.normalizer = normalizer or ResponseNormalizer()

    async def analyze(self, job_description: str, cv: str) -> NormalizedResponse:
        """Ask the LLM for a comparison and normalize its reply.

        Client errors propagate; the normalizer never raises.
        """
        raw = await self.llm.invoke(build_prompt(job_description, cv))
        return self.normalizer.normalize_detailed(raw)
