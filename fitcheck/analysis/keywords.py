from __future__ import annotations

import re
from collections import Counter

from fitcheck.schemas.analysis import KeywordReport

TOKEN_SPLIT_RE = re.compile(r"[^a-z0-9+.#/-]+")

STOPWORDS = {
    # Articles, pronouns, determiners
    "a", "an", "the", "and", "or", "for", "with", "that", "this", "your", "you", "from", "into",
    "our", "are", "its", "his", "her", "their", "they", "them", "these", "those", "which", "what",
    "who", "whom", "whose", "where", "when", "how", "why", "each", "every", "both", "few", "many",
    "much", "some", "any", "all", "most", "other", "another", "such", "than", "then", "we", "us",
    "it", "he", "she", "i", "me", "my",
    # Common verbs / modals / auxiliaries
    "is", "be", "will", "must", "have", "has", "had", "can", "could", "would", "should", "shall",
    "may", "might", "been", "being", "was", "were", "do", "did", "does", "not", "also", "too",
    "very", "just", "only", "even", "still", "yet", "already", "always", "never", "often", "well",
    # Common prepositions / conjunctions
    "to", "of", "in", "on", "at", "by", "as", "if", "so", "but", "nor", "about", "above", "after",
    "before", "between", "during", "under", "over", "through", "within", "without", "across",
    "per", "via", "etc",
    # Posting boilerplate
    "job", "role", "work", "working", "team", "teams", "company", "position", "candidate",
    "candidates", "looking", "join", "apply", "including", "ability", "able", "strong", "new",
    "years", "year", "experience", "responsibilities", "requirements", "preferred", "required",
}

BUZZWORDS = [
    "results-driven",
    "detail-oriented",
    "self-starter",
    "go-getter",
    "team player",
    "dynamic",
    "synergy",
    "innovative",
    "hard-working",
    "fast-paced",
    "proactive",
    "strategic thinker",
    "passionate",
    "thought leader",
    "rockstar",
]


def tokenize(text: str) -> list[str]:
    # Sentence punctuation clings to tokens; ".net", "c++" and "c#" keep theirs.
    tokens = (token.rstrip(".-/").lstrip("-/") for token in TOKEN_SPLIT_RE.split((text or "").lower()))
    return [token for token in tokens if token]


def top_keywords(text: str, n: int = 40) -> list[str]:
    counts = Counter(token for token in tokenize(text) if len(token) >= 2 and token not in STOPWORDS)
    return [term for term, _ in counts.most_common(n)]


def coverage(keywords: list[str], text: str) -> tuple[list[str], list[str]]:
    lowered = (text or "").lower()
    matched: list[str] = []
    missing: list[str] = []
    for keyword in keywords:
        if keyword.lower() in lowered:
            matched.append(keyword)
        else:
            missing.append(keyword)
    return matched, missing


def overused_buzzwords(text: str) -> list[str]:
    lowered = (text or "").lower()
    return [phrase for phrase in BUZZWORDS if phrase in lowered]


def keyword_report(job_text: str, resume_text: str, limit: int = 40) -> KeywordReport:
    keywords = top_keywords(job_text, n=limit)
    matched, missing = coverage(keywords, resume_text)
    ratio = round(len(matched) / len(keywords), 3) if keywords else 0.0
    return KeywordReport(
        keywords=keywords,
        matched=matched,
        missing=missing,
        coverage=ratio,
        buzzwords=overused_buzzwords(resume_text),
    )
