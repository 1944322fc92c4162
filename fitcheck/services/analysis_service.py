from __future__ import annotations

import logging
import time
from dataclasses import dataclass

from fitcheck.ai.factory import get_ai_client
from fitcheck.ai.types import AIClient
from fitcheck.analysis.prompt import build_request
from fitcheck.analysis.recovery import ANALYSIS_ERROR_LABEL, recover
from fitcheck.core.config import Settings
from fitcheck.core.errors import DocumentError, MissingInputError
from fitcheck.extraction.documents import UploadedDocument, read_uploaded_document
from fitcheck.extraction.fetch import DocumentFetcher
from fitcheck.extraction.normalize import clip, normalize_pasted_text
from fitcheck.extraction.validation import ValidationVerdict, validate
from fitcheck.schemas.analysis import AnalysisResult, Previews

logger = logging.getLogger(__name__)

PASTED_JOB_MIN_CHARS = 50
PREVIEW_CHARS = 10000
SHORT_CIRCUIT_PREVIEW_CHARS = 5000

SHORT_CIRCUIT_IMPROVEMENTS = "Provide a complete job description and resume to receive improvement suggestions."

# verdict -> (recommendation, explanation)
JOB_SHORT_CIRCUITS = {
    ValidationVerdict.TOO_SHORT: (
        "Could not extract sufficient job description content. "
        "Please try pasting the job description directly or use a different URL.",
        "Unable to analyze due to insufficient job description content.",
    ),
    ValidationVerdict.LOOKS_LIKE_SEARCH_RESULTS: (
        "The URL appears to be a job search page rather than a specific job posting. "
        "Please navigate to the actual job posting and copy that URL.",
        "The extracted content appears to be from a job search or careers page "
        "rather than a specific job description.",
    ),
    ValidationVerdict.LOOKS_LIKE_ERROR_PAGE: (
        "The job posting page could not be read. "
        "Please paste the job description directly or try a different URL.",
        "The extracted content looks like an error or access-restricted page "
        "rather than a job description.",
    ),
}
RESUME_TOO_SHORT = (
    "Could not extract resume content. Please try uploading a different file or use a resume URL.",
    "Unable to analyze due to insufficient resume content.",
)


@dataclass(frozen=True)
class AnalyzeInput:
    job_url: str = ""
    job_description: str = ""
    resume_url: str = ""
    resume_file: UploadedDocument | None = None


def short_circuit_result(
    recommendation: str,
    explanation: str,
    *,
    job_text: str,
    resume_text: str,
) -> AnalysisResult:
    return AnalysisResult(
        fit_level=ANALYSIS_ERROR_LABEL,
        recommendation=recommendation,
        match_score=0,
        explanation=explanation,
        improvements=SHORT_CIRCUIT_IMPROVEMENTS,
        previews=Previews(
            job_text=job_text[:SHORT_CIRCUIT_PREVIEW_CHARS],
            resume_text=resume_text[:SHORT_CIRCUIT_PREVIEW_CHARS],
        ),
    )


class FitAnalyzer:
    """Runs one job/resume fit analysis end to end.

    Input problems that the user can fix by supplying better content (empty
    pages, search pages, unreadable uploads) come back as a zero-score result
    without calling the model. Only missing inputs, missing configuration and
    provider failures raise.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        ai_client: AIClient | None = None,
        fetcher: DocumentFetcher | None = None,
    ):
        self._settings = settings
        self._ai_client = ai_client
        self._fetcher = fetcher or DocumentFetcher(
            timeout_s=settings.fetch_timeout_s,
            max_bytes=settings.max_upload_bytes,
        )

    def _client(self) -> AIClient:
        if self._ai_client is None:
            self._ai_client = get_ai_client(self._settings)
        return self._ai_client

    async def _job_text(self, request: AnalyzeInput) -> str:
        pasted = (request.job_description or "").strip()
        if len(pasted) > PASTED_JOB_MIN_CHARS or not request.job_url.strip():
            logger.info("analyze_job_source source=pasted chars=%s", len(pasted))
            return normalize_pasted_text(pasted)
        logger.info("analyze_job_source source=url url=%s", request.job_url)
        return await self._fetcher.fetch_text(request.job_url, role="job")

    async def _resume_text(self, request: AnalyzeInput) -> str:
        if request.resume_url.strip():
            logger.info("analyze_resume_source source=url url=%s", request.resume_url)
            return await self._fetcher.fetch_text(request.resume_url, role="resume")
        if request.resume_file is None:
            raise MissingInputError("Provide a resume URL or upload a resume file.", field="resume")
        logger.info("analyze_resume_source source=upload filename=%s", request.resume_file.filename)
        return read_uploaded_document(request.resume_file, max_bytes=self._settings.max_upload_bytes)

    async def analyze(self, request: AnalyzeInput) -> AnalysisResult:
        client = self._client()

        if not request.job_url.strip() and not request.job_description.strip():
            raise MissingInputError("Either jobUrl or jobDescription is required", field="jobUrl")
        if not request.resume_url.strip() and request.resume_file is None:
            raise MissingInputError("Provide a resume URL or upload a resume file.", field="resume")

        job_text = clip(await self._job_text(request))
        try:
            resume_text = clip(await self._resume_text(request))
        except DocumentError as exc:
            logger.info("analyze_short_circuit reason=document_error detail=%s", exc)
            return short_circuit_result(
                str(exc),
                "Unable to analyze because the resume document could not be read.",
                job_text=job_text,
                resume_text="",
            )

        logger.info("analyze_texts job_chars=%s resume_chars=%s", len(job_text), len(resume_text))

        job_verdict = validate(job_text, "job")
        if job_verdict is not ValidationVerdict.VALID:
            logger.info("analyze_short_circuit reason=%s job_chars=%s", job_verdict.value, len(job_text))
            recommendation, explanation = JOB_SHORT_CIRCUITS[job_verdict]
            return short_circuit_result(recommendation, explanation, job_text=job_text, resume_text=resume_text)

        resume_verdict = validate(resume_text, "resume")
        if resume_verdict is not ValidationVerdict.VALID:
            logger.info("analyze_short_circuit reason=resume_%s resume_chars=%s", resume_verdict.value, len(resume_text))
            recommendation, explanation = RESUME_TOO_SHORT
            return short_circuit_result(recommendation, explanation, job_text=job_text, resume_text=resume_text)

        completion = build_request(
            job_text,
            resume_text,
            max_tokens=self._settings.completion_max_tokens,
            temperature=self._settings.completion_temperature,
        )
        started = time.perf_counter()
        raw_reply = await client.complete(
            completion.messages(),
            max_tokens=completion.max_tokens,
            temperature=completion.temperature,
        )
        result = recover(raw_reply)
        result.previews = Previews(
            job_text=job_text[:PREVIEW_CHARS],
            resume_text=resume_text[:PREVIEW_CHARS],
        )
        logger.info(
            "analyze_completed fit_level=%s match_score=%s latency_ms=%s",
            result.fit_level,
            result.match_score,
            int((time.perf_counter() - started) * 1000),
        )
        return result
