from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Previews(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    job_text: str = ""
    resume_text: str = ""


class AnalysisResult(BaseModel):
    """Fit assessment returned to the caller.

    Keys are camelCase on the wire. Unknown keys returned by the model are
    kept as-is.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    fit_level: str
    recommendation: str
    match_score: int | float
    explanation: str
    improvements: str
    previews: Previews | None = None


class ErrorResponse(BaseModel):
    error: str
    details: str | None = None


class AnalyzeStatusResponse(BaseModel):
    ok: bool
    message: str
    route: str
    expects: str
    timestamp: datetime
    openai_configured: bool
    environment: str


class KeywordRequest(BaseModel):
    job_text: str = Field(min_length=1, max_length=160000)
    resume_text: str = Field(min_length=1, max_length=160000)
    limit: int = Field(default=40, ge=1, le=200)


class KeywordReport(BaseModel):
    keywords: list[str]
    matched: list[str]
    missing: list[str]
    coverage: float = Field(ge=0.0, le=1.0)
    buzzwords: list[str]
