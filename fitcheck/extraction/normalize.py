from __future__ import annotations

import re
from dataclasses import dataclass
from html import unescape

from bs4 import BeautifulSoup

EXTRACTION_CAP = 160_000
NON_TEXT_MARKER = "[Non-HTML content detected at URL]"

NOISE_TAGS = ["script", "style", "noscript", "svg", "header", "footer", "nav", "aside"]
MAIN_CONTENT_SELECTOR = (
    "main, article, [role='main'], .job, .job-details, .jobdescription, "
    ".job-description, .posting, .description"
)
# Narrowed containers shorter than a usable job posting fall back to the body.
MIN_MAIN_CONTENT_CHARS = 100

_SCRIPT_RE = re.compile(r"(?is)<script\b.*?>.*?</script\s*>")
_STYLE_RE = re.compile(r"(?is)<style\b.*?>.*?</style\s*>")
_NOSCRIPT_RE = re.compile(r"(?is)<noscript\b.*?>.*?</noscript\s*>")
_TAG_RE = re.compile(r"(?s)<[^>]+>")
_WHITESPACE_RE = re.compile(r"\s+")


@dataclass(frozen=True)
class RawDocument:
    content: str
    content_type: str = "text/plain"


def clip(text: str, limit: int = EXTRACTION_CAP) -> str:
    if text and len(text) > limit:
        return text[:limit]
    return text or ""


def collapse_whitespace(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def strip_html_fast(html: str) -> str:
    """Regex tag stripper: drops script/style bodies, then every remaining tag."""
    text = _SCRIPT_RE.sub(" ", html or "")
    text = _STYLE_RE.sub(" ", text)
    text = _NOSCRIPT_RE.sub(" ", text)
    text = _TAG_RE.sub(" ", text)
    return collapse_whitespace(unescape(text))


def extract_main_content(html: str) -> str:
    """Visible text of the most specific posting-like container in the page.

    Navigation, header, footer and aside regions are removed first. When no
    container matches, or the match is too small to be the posting itself, the
    whole body is used instead.
    """
    soup = BeautifulSoup(html or "", "html.parser")
    for node in soup(NOISE_TAGS):
        node.decompose()

    main = soup.select_one(MAIN_CONTENT_SELECTOR)
    if main is not None:
        text = collapse_whitespace(main.get_text(" "))
        if len(text) >= MIN_MAIN_CONTENT_CHARS:
            return text

    root = soup.body or soup
    return collapse_whitespace(root.get_text(" "))


def is_html_content_type(content_type: str) -> bool:
    return "html" in (content_type or "").lower()


def is_text_content_type(content_type: str) -> bool:
    lowered = (content_type or "").lower()
    return "html" in lowered or "text" in lowered


def normalize(raw: RawDocument, *, narrow: bool = True) -> str:
    if is_html_content_type(raw.content_type):
        text = extract_main_content(raw.content) if narrow else strip_html_fast(raw.content)
    elif is_text_content_type(raw.content_type):
        text = (raw.content or "").strip()
    else:
        return NON_TEXT_MARKER
    return clip(text)


def normalize_pasted_text(text: str) -> str:
    return normalize(RawDocument(content=text or "", content_type="text/plain"))
