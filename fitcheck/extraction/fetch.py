from __future__ import annotations

import logging
import re
from urllib.parse import urlparse, urlunparse

import httpx

from fitcheck.core.errors import HttpStatusError
from fitcheck.extraction.documents import MAX_DOCUMENT_BYTES, extract_document_text, resolve_extension
from fitcheck.extraction.normalize import (
    NON_TEXT_MARKER,
    RawDocument,
    clip,
    is_text_content_type,
    normalize,
)
from fitcheck.extraction.validation import UNUSABLE_JOB_PAGE_MESSAGE, Role, looks_like_unusable_page

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
        "AppleWebKit/537.36 (KHTML, like Gecko) "
        "Chrome/122.0.0.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,application/pdf,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
    "Cache-Control": "no-cache",
}

JOB_FETCH_ERROR = "Error fetching job posting content. Please check the URL and try again."
RESUME_FETCH_ERROR = "Error fetching resume content from URL."

RESUME_DOCUMENT_EXTENSIONS = {"pdf", "docx"}


def normalize_url(raw_url: str) -> str:
    value = (raw_url or "").strip()
    if not value:
        raise ValueError("URL is required.")
    if not re.match(r"^[a-z][a-z0-9+.-]*://", value, flags=re.IGNORECASE):
        value = f"https://{value}"
    parsed = urlparse(value)
    if parsed.scheme.lower() not in {"http", "https"}:
        raise ValueError("Only http/https URLs are supported.")
    if not parsed.netloc or not parsed.hostname:
        raise ValueError("Invalid URL host.")
    return urlunparse(
        (
            parsed.scheme.lower(),
            parsed.netloc.lower(),
            parsed.path or "/",
            parsed.params,
            parsed.query,
            "",
        )
    )


def fetch_failure_message(role: Role) -> str:
    return RESUME_FETCH_ERROR if role == "resume" else JOB_FETCH_ERROR


def _filename_from_url(url: str) -> str:
    path = urlparse(url).path or ""
    return path.rstrip("/").rsplit("/", 1)[-1]


class DocumentFetcher:
    """Fetches a job posting or resume URL and returns plain text.

    Failures never propagate: any transport error or non-2xx status is
    logged and replaced by a short diagnostic string which the content
    validator rejects downstream.
    """

    def __init__(
        self,
        *,
        timeout_s: float = 15.0,
        max_bytes: int = MAX_DOCUMENT_BYTES,
        narrow_html: bool = True,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._timeout_s = timeout_s
        self._max_bytes = max_bytes
        self._narrow_html = narrow_html
        self._transport = transport

    async def _get(self, url: str) -> httpx.Response:
        async with httpx.AsyncClient(
            timeout=self._timeout_s,
            follow_redirects=True,
            headers=DEFAULT_HEADERS,
            transport=self._transport,
        ) as client:
            response = await client.get(url)
        if not response.is_success:
            raise HttpStatusError(response.status_code, str(response.url))
        return response

    def _response_text(self, response: httpx.Response, role: Role) -> str:
        content_type = response.headers.get("content-type", "")
        if role == "resume":
            filename = _filename_from_url(str(response.url))
            if resolve_extension(filename, content_type) in RESUME_DOCUMENT_EXTENSIONS:
                text = extract_document_text(
                    filename or "resume",
                    response.content,
                    content_type,
                    max_bytes=self._max_bytes,
                )
                return clip(text)

        if not is_text_content_type(content_type):
            return NON_TEXT_MARKER

        text = normalize(RawDocument(content=response.text, content_type=content_type), narrow=self._narrow_html)
        if role == "job" and looks_like_unusable_page(text):
            logger.info("fetch_unusable_page url=%s chars=%s", response.url, len(text))
            return UNUSABLE_JOB_PAGE_MESSAGE
        return text

    async def fetch_text(self, url: str, role: Role = "job") -> str:
        try:
            target = normalize_url(url)
            response = await self._get(target)
            text = self._response_text(response, role)
        except Exception as exc:  # noqa: BLE001 - fetch failures degrade to explanatory text
            logger.warning("fetch_failed role=%s url=%s: %s", role, url, exc)
            return fetch_failure_message(role)
        logger.info("fetch_succeeded role=%s url=%s chars=%s", role, url, len(text))
        return text
