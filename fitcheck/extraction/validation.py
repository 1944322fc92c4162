from __future__ import annotations

from enum import Enum
from typing import Literal

Role = Literal["job", "resume"]

MIN_JOB_CHARS = 100
MIN_RESUME_CHARS = 50
SEARCH_PAGE_MAX_CHARS = 500

SEARCH_RESULTS_MARKERS = ("search jobs",)
# Only consulted on freshly scraped pages. Pasted postings may legitimately
# mention these phrases.
ERROR_PAGE_MARKERS = ("page not found", "access denied")

# Substituted by the fetcher for a scraped job page that failed the
# fetch-time check.
UNUSABLE_JOB_PAGE_MESSAGE = (
    "Error: Unable to extract job content from this URL. "
    "The page may require JavaScript or have access restrictions. Please try:\n"
    "1. Copy and paste the job description directly\n"
    "2. Use a different job posting URL (try Indeed, LinkedIn Jobs, or company career pages)\n"
    '3. Look for a "View Full Job Description" or "Apply" link that goes to a static page'
)


class ValidationVerdict(str, Enum):
    VALID = "valid"
    TOO_SHORT = "too_short"
    LOOKS_LIKE_ERROR_PAGE = "looks_like_error_page"
    LOOKS_LIKE_SEARCH_RESULTS = "looks_like_search_results"


def _contains_any(text: str, markers: tuple[str, ...]) -> bool:
    lowered = text.lower()
    return any(marker in lowered for marker in markers)


def min_chars_for(role: Role) -> int:
    return MIN_RESUME_CHARS if role == "resume" else MIN_JOB_CHARS


def is_too_short(text: str, role: Role = "job") -> bool:
    return len(text or "") < min_chars_for(role)


def looks_like_search_results(text: str) -> bool:
    text = text or ""
    return len(text) < SEARCH_PAGE_MAX_CHARS and _contains_any(text, SEARCH_RESULTS_MARKERS)


def looks_like_error_page(text: str) -> bool:
    return _contains_any(text or "", ERROR_PAGE_MARKERS)


def is_unusable_page_notice(text: str) -> bool:
    return (text or "").strip() == UNUSABLE_JOB_PAGE_MESSAGE


def looks_like_unusable_page(text: str) -> bool:
    """Fetch-time check on a scraped job page, before any analysis."""
    text = text or ""
    return (
        is_too_short(text, "job")
        or _contains_any(text, SEARCH_RESULTS_MARKERS)
        or _contains_any(text, ERROR_PAGE_MARKERS)
    )


def validate(text: str, role: Role) -> ValidationVerdict:
    if is_too_short(text, role):
        return ValidationVerdict.TOO_SHORT
    if role == "resume":
        return ValidationVerdict.VALID
    if looks_like_search_results(text):
        return ValidationVerdict.LOOKS_LIKE_SEARCH_RESULTS
    if is_unusable_page_notice(text):
        return ValidationVerdict.LOOKS_LIKE_ERROR_PAGE
    return ValidationVerdict.VALID
