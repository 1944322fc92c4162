from fastapi import APIRouter, Request

from fitcheck.analysis.keywords import keyword_report
from fitcheck.core.config import settings
from fitcheck.core.rate_limit import rate_limit
from fitcheck.schemas.analysis import KeywordReport, KeywordRequest

router = APIRouter()


@router.post(
    "/keywords",
    response_model=KeywordReport,
    summary="Keyword Coverage",
    description="Top job-posting keywords, which of them the resume mentions, and cliché phrases in the resume.",
)
@rate_limit(settings.keywords_rate_limit)
async def keywords(request: Request, payload: KeywordRequest):
    _ = request
    return keyword_report(payload.job_text, payload.resume_text, limit=payload.limit)
