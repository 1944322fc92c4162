from datetime import datetime, timezone

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from fitcheck.core.config import settings
from fitcheck.core.rate_limit import rate_limit
from fitcheck.extraction.documents import UploadedDocument
from fitcheck.schemas.analysis import AnalysisResult, AnalyzeStatusResponse, ErrorResponse
from fitcheck.services.analysis_service import AnalyzeInput, FitAnalyzer

router = APIRouter()

UPLOAD_CHUNK_BYTES = 64 * 1024


def get_fit_analyzer() -> FitAnalyzer:
    return FitAnalyzer(settings)


async def _read_upload(file: UploadFile, max_bytes: int) -> bytes:
    # Stops one byte past the cap so the reader can report the size problem.
    chunks: list[bytes] = []
    total = 0
    while total <= max_bytes:
        chunk = await file.read(UPLOAD_CHUNK_BYTES)
        if not chunk:
            break
        total += len(chunk)
        chunks.append(chunk)
    return b"".join(chunks)


@router.get("/analyze", response_model=AnalyzeStatusResponse)
async def analyze_status():
    return AnalyzeStatusResponse(
        ok=True,
        message="Resume Analysis API is running",
        route="/v1/analyze",
        expects="POST form-data with jobUrl or jobDescription, and resumeUrl or resumeFile",
        timestamp=datetime.now(timezone.utc),
        openai_configured=settings.openai_configured,
        environment=settings.app_env,
    )


@router.post(
    "/analyze",
    response_model=AnalysisResult,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
        504: {"model": ErrorResponse},
    },
)
@rate_limit()
async def analyze(
    request: Request,
    job_url: str = Form(default="", alias="jobUrl"),
    job_description: str = Form(default="", alias="jobDescription"),
    resume_url: str = Form(default="", alias="resumeUrl"),
    resume_file: UploadFile | None = File(default=None, alias="resumeFile"),
    analyzer: FitAnalyzer = Depends(get_fit_analyzer),
):
    _ = request
    upload = None
    if resume_file is not None and resume_file.filename:
        content = await _read_upload(resume_file, settings.max_upload_bytes)
        upload = UploadedDocument(
            filename=resume_file.filename,
            content=content,
            content_type=resume_file.content_type or "",
        )

    return await analyzer.analyze(
        AnalyzeInput(
            job_url=job_url,
            job_description=job_description,
            resume_url=resume_url,
            resume_file=upload,
        )
    )
