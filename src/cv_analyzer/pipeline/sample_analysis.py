"""Deterministic analysis returned when the AI service cannot be used."""

from __future__ import annotations

from cv_analyzer.models.analysis import AnalysisResult

SAMPLE_ANALYSIS: dict = {
    "overallScore": 85,
    "strengths": [
        "Strong technical background in React and Node.js",
        "5+ years of relevant experience",
        "Previous work in similar industry",
        "Excellent problem-solving skills",
        "Good communication abilities",
    ],
    "weaknesses": [
        "Limited experience with TypeScript",
        "No experience with cloud platforms (AWS/Azure)",
        "Gap in employment history (2020-2021)",
        "Limited leadership experience",
    ],
    "alignment": {
        "technicalSkills": 80,
        "experience": 90,
        "education": 75,
        "softSkills": 85,
    },
    "recommendations": [
        "Consider additional training in TypeScript to meet job requirements",
        "Highlight relevant project experience in cover letter",
        "Address employment gap with explanation of personal development activities",
        "Emphasize any leadership or mentoring experience",
        "Consider obtaining cloud platform certifications",
    ],
    "summary": (
        "The candidate shows strong potential with relevant technical skills and "
        "experience. While there are some gaps in specific technologies mentioned "
        "in the job description, the overall profile aligns well with the role "
        "requirements. With some additional training in the missing technologies, "
        "they would be an excellent fit for the position."
    ),
    "keyMatches": [
        "React development experience",
        "Node.js backend knowledge",
        "Agile methodology experience",
        "Database management skills",
        "Version control proficiency",
    ],
    "missingRequirements": [
        "TypeScript proficiency",
        "AWS/Cloud experience",
        "Team leadership experience",
        "Docker containerization knowledge",
    ],
}


def sample_analysis() -> AnalysisResult:
    """Return a fresh copy of the canned analysis."""
    return AnalysisResult.model_validate(SAMPLE_ANALYSIS)
