"""Turn a raw model reply into an AnalysisResult.

The completion provider is asked for a single JSON object but nothing
guarantees it sends one. Recovery happens in two stages:

1. ``parse_reply`` classifies the reply as ``ParsedReply`` (a JSON object
   carrying ``fitLevel``, ``recommendation`` and a numeric ``matchScore``) or
   ``DegradedReply`` (anything else).
2. ``recover`` unwraps either outcome into one concrete ``AnalysisResult``.
   Parsed payloads get their optional fields defaulted and structured fields
   flattened to text. Degraded replies are mined for a score and a fit label.

Neither function raises.
"""

from __future__ import annotations

import json
import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Union

from pydantic import ValidationError

from fitcheck.schemas.analysis import AnalysisResult

logger = logging.getLogger(__name__)

ANALYSIS_ERROR_LABEL = "Analysis Error"
DEFAULT_IMPROVEMENTS = "No specific improvements provided in this analysis."
EXPLANATION_FORMAT_ISSUE = "Analysis completed but explanation formatting issue occurred."
IMPROVEMENTS_FORMAT_ISSUE = "Improvement suggestions could not be formatted properly."

DEGRADED_RECOMMENDATION = (
    "Analysis completed but there was an issue with response formatting. "
    "Please try again for full details."
)
DEGRADED_EXPLANATION = "Error processing the AI analysis response."
DEGRADED_IMPROVEMENTS = "Unable to generate improvement suggestions due to response formatting issues."
DEGRADED_EXCERPT_CHARS = 2000
DEGRADED_MIN_EXCERPT_SOURCE = 100

_FENCE_RE = re.compile(r"```(?:json|JSON)?\s*")
_SCORE_RE = re.compile(r"(\d+)\s*/\s*100(?!\d)")
_FIT_LEVEL_RE = re.compile(r"\b(Strong|Good|Moderate|Weak|Poor)\s+fit\b", re.IGNORECASE)
_STRUCTURAL_CHARS_RE = re.compile(r'[{}\[\]"]')
_BLANK_RUN_RE = re.compile(r"\n{3,}")


@dataclass(frozen=True)
class ParsedReply:
    payload: dict[str, Any]


@dataclass(frozen=True)
class DegradedReply:
    raw_text: str
    reason: str


ReplyOutcome = Union[ParsedReply, DegradedReply]


def strip_code_fences(text: str) -> str:
    return _FENCE_RE.sub("", text or "").strip()


def extract_json_candidate(text: str) -> str:
    """The reply itself if it is a bare object, else its first ``{`` .. last ``}`` span."""
    cleaned = strip_code_fences(text)
    if cleaned.startswith("{") and cleaned.endswith("}"):
        return cleaned
    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start != -1 and end > start:
        return cleaned[start : end + 1]
    return cleaned


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # Integers beyond float range.
        return False


def schema_problem(payload: Any) -> str | None:
    if not isinstance(payload, dict):
        return "not_an_object"
    if not payload.get("fitLevel"):
        return "missing_fit_level"
    if not payload.get("recommendation"):
        return "missing_recommendation"
    if not _is_number(payload.get("matchScore")):
        return "invalid_match_score"
    return None


def parse_reply(raw_text: str) -> ReplyOutcome:
    raw_text = raw_text or ""
    if not raw_text.strip():
        return DegradedReply(raw_text=raw_text, reason="empty")

    candidate = extract_json_candidate(raw_text)
    try:
        payload = json.loads(candidate)
    except (json.JSONDecodeError, ValueError, RecursionError):
        return DegradedReply(raw_text=raw_text, reason="invalid_json")

    problem = schema_problem(payload)
    if problem:
        return DegradedReply(raw_text=raw_text, reason=problem)
    return ParsedReply(payload=payload)


def _render_lines(value: Any, indent: int = 0) -> list[str]:
    pad = "  " * indent
    if isinstance(value, dict):
        lines: list[str] = []
        for key, item in value.items():
            if isinstance(item, (dict, list)):
                lines.append(f"{pad}{key}:")
                lines.extend(_render_lines(item, indent + 1))
            else:
                lines.append(f"{pad}{key}: {_scalar_text(item)}")
        return lines
    if isinstance(value, list):
        lines = []
        for item in value:
            if isinstance(item, (dict, list)):
                lines.extend(_render_lines(item, indent))
                lines.append("")
            else:
                lines.append(f"{pad}{_scalar_text(item)}")
        return lines
    return [f"{pad}{_scalar_text(value)}"]


def _scalar_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def flatten_structured_text(value: Any) -> str:
    """Render nested objects/arrays as readable ``key: value`` lines.

    Braces, brackets and double quotes are dropped, every line is trimmed and
    runs of blank lines are collapsed to one.
    """
    lines = [_STRUCTURAL_CHARS_RE.sub("", line).strip() for line in _render_lines(value)]
    text = "\n".join(lines)
    return _BLANK_RUN_RE.sub("\n\n", text).strip()


def _text_field(value: Any, fallback: str) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list)):
        try:
            return flatten_structured_text(value) or fallback
        except RecursionError:
            logger.warning("reply_field_too_deep fallback=%r", fallback[:40])
            return fallback
    return fallback


def normalize_payload(payload: dict[str, Any]) -> dict[str, Any]:
    data = dict(payload)
    fit_level = data["fitLevel"]
    if isinstance(fit_level, (dict, list)):
        data["fitLevel"] = _text_field(fit_level, ANALYSIS_ERROR_LABEL)
    elif not isinstance(fit_level, str):
        data["fitLevel"] = _scalar_text(fit_level)
    recommendation = data["recommendation"]
    if isinstance(recommendation, (dict, list)):
        data["recommendation"] = _text_field(recommendation, DEGRADED_RECOMMENDATION)
    elif not isinstance(recommendation, str):
        data["recommendation"] = _scalar_text(recommendation)
    if not data.get("improvements"):
        data["improvements"] = DEFAULT_IMPROVEMENTS
    data["explanation"] = _text_field(data.get("explanation"), EXPLANATION_FORMAT_ISSUE)
    data["improvements"] = _text_field(data["improvements"], IMPROVEMENTS_FORMAT_ISSUE)
    data.pop("previews", None)
    return data


def extract_score(text: str) -> int:
    match = _SCORE_RE.search(text or "")
    return int(match.group(1)) if match else 0


def extract_fit_level(text: str) -> str:
    match = _FIT_LEVEL_RE.search(text or "")
    if not match:
        return ANALYSIS_ERROR_LABEL
    return f"{match.group(1).capitalize()} Fit"


def degraded_result(raw_text: str) -> AnalysisResult:
    raw_text = raw_text or ""
    if len(raw_text) > DEGRADED_MIN_EXCERPT_SOURCE:
        explanation = raw_text[:DEGRADED_EXCERPT_CHARS] + "..."
    else:
        explanation = DEGRADED_EXPLANATION
    return AnalysisResult(
        fit_level=extract_fit_level(raw_text),
        recommendation=DEGRADED_RECOMMENDATION,
        match_score=extract_score(raw_text),
        explanation=explanation,
        improvements=DEGRADED_IMPROVEMENTS,
    )


def recover(raw_text: str) -> AnalysisResult:
    outcome = parse_reply(raw_text)
    if isinstance(outcome, ParsedReply):
        try:
            return AnalysisResult.model_validate(normalize_payload(outcome.payload))
        except (ValidationError, RecursionError) as exc:
            logger.warning("reply_model_validation_failed: %s", exc)
            outcome = DegradedReply(raw_text=raw_text or "", reason="model_validation")

    logger.warning(
        "reply_degraded reason=%s chars=%s preview=%r",
        outcome.reason,
        len(outcome.raw_text),
        outcome.raw_text[:200],
    )
    return degraded_result(outcome.raw_text)
