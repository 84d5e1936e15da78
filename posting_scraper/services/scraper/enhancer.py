# =============================================================================
# Content Enhancer
# =============================================================================
"""
Post-extraction cleanup of job posting text.

The enhancer prepares extracted text for the downstream field-extraction
model. It is pure and idempotent: enhancing already enhanced text returns it
unchanged.

- Prepends ``Company: <name>`` (or ``Source: <hostname>``) unless the name is
  already present in the text.
- Removes boilerplate phrases such as "Apply now" or "Cookie policy".
- Rewrites common section headings to canonical headings on their own line.
  This is keyword matching, not structural parsing, so prose that merely
  mentions "benefits" is tagged as well. The downstream model tolerates it.
- Collapses blank-line runs and trims.
"""

import logging
import re
from typing import Optional


# -----------------------------------------------------------------------------
# Logging Configuration
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Noise Phrases
# -----------------------------------------------------------------------------
NOISE_PHRASES: tuple[str, ...] = (
    "apply now",
    "share this job",
    "save job",
    "back to search",
    "view all jobs",
    "cookie policy",
    "privacy policy",
    "terms of service",
)


def _phrase_pattern(phrase: str, escape: bool = True) -> str:
    """Regex for a phrase whose words may be separated by any whitespace run."""
    words = phrase.split()
    if escape:
        words = [re.escape(word) for word in words]
    return r"\s+".join(words)


_NOISE_RE = re.compile(
    r"\b(?:"
    + "|".join(_phrase_pattern(phrase) for phrase in NOISE_PHRASES)
    + r")\b",
    re.IGNORECASE,
)
_COPYRIGHT_RE = re.compile(
    r"(?:©|\(c\)|\bcopyright\b)[^\n]*?\ball\s+rights\s+reserved\b\.?",
    re.IGNORECASE,
)


# -----------------------------------------------------------------------------
# Section Headings
# -----------------------------------------------------------------------------
SECTION_SYNONYMS: dict[str, tuple[str, ...]] = {
    "Job Description": ("job description", "description", "overview"),
    "Responsibilities": ("responsibilities", "duties", "what you.ll do"),
    "Requirements": ("requirements", "qualifications", "what we.re looking for"),
    "Benefits": ("benefits", "perks", "what we offer"),
    "About the Company": ("about us", "about the company", "company overview"),
}

_CANONICAL_BY_SYNONYM = {
    synonym: heading
    for heading, synonyms in SECTION_SYNONYMS.items()
    for synonym in synonyms
}

# Longest synonyms first so "company overview" wins over "overview".
# A synonym never matches inside a hostname, e-mail address or path
# ("jobs.perks.io", "perks-hub.com", "hr@benefits.example").
_HEADING_RE = re.compile(
    r"\s*(?<![\w@/-])(?<!\w\.)("
    + "|".join(
        _phrase_pattern(synonym, escape=False)
        for synonym in sorted(_CANONICAL_BY_SYNONYM, key=len, reverse=True)
    )
    + r")(?![\w@/-]|\.\w)[ \t]*:?\s*",
    re.IGNORECASE,
)

_INLINE_WS_RE = re.compile(r"[^\S\n]+")
_BLANK_RUN_RE = re.compile(r"\n{3,}")


# -----------------------------------------------------------------------------
# Job Keyword Heuristic
# -----------------------------------------------------------------------------
JOB_KEYWORDS: tuple[str, ...] = (
    "job", "position", "role", "career", "employment", "hiring",
    "responsibilities", "requirements", "qualifications", "experience",
    "salary", "benefits", "apply", "candidate", "skills",
)
MIN_JOB_KEYWORDS = 3


def _canonical_heading(match: re.Match) -> str:
    synonym = " ".join(match.group(1).lower().split())
    heading = _CANONICAL_BY_SYNONYM.get(synonym)
    if heading is None:
        # "what you'll do" and friends match through the wildcard character.
        heading = next(
            canonical
            for pattern, canonical in _CANONICAL_BY_SYNONYM.items()
            if re.fullmatch(pattern, synonym)
        )
    return f"\n\n{heading}:\n"


def remove_noise(text: str) -> str:
    """
    Remove boilerplate phrases and copyright lines.

    Args:
        text: Text to clean.

    Returns:
        Text without the noise phrases (whitespace is not collapsed).
    """
    # Removing a phrase can join its neighbours into a new one.
    while True:
        cleaned = _NOISE_RE.sub(" ", _COPYRIGHT_RE.sub(" ", text))
        if cleaned == text:
            return cleaned
        text = cleaned


def canonicalize_headings(text: str) -> str:
    """Rewrite section heading synonyms to canonical headings on their own line."""
    return _HEADING_RE.sub(_canonical_heading, text)


def collapse_whitespace(text: str) -> str:
    """
    Collapse inline whitespace and blank-line runs, then trim.

    Args:
        text: Text to tidy.

    Returns:
        Text with single spaces, no trailing spaces on lines and at most one
        blank line between paragraphs.
    """
    lines = [_INLINE_WS_RE.sub(" ", line).strip() for line in text.split("\n")]
    return _BLANK_RUN_RE.sub("\n\n", "\n".join(lines)).strip()


def enhance_content(
    text: str,
    company: Optional[str] = None,
    hostname: Optional[str] = None,
) -> str:
    """
    Clean extracted job text and stamp its provenance.

    Args:
        text: Extracted job posting text.
        company: Canonical employer name from the site registry, if known.
        hostname: Hostname of the job page, used when no company is known.

    Returns:
        The enhanced text.
    """
    if not text:
        return ""

    name = company or hostname
    label = "Company" if company else "Source"
    banner = f"{label}: {name}" if name else ""

    # An existing banner for the same name is kept out of the cleanup.
    if banner and text.startswith(f"{banner}\n"):
        text = text[len(banner):]

    cleaned = remove_noise(text)
    cleaned = canonicalize_headings(cleaned)
    cleaned = collapse_whitespace(cleaned)

    if name and name.lower() not in cleaned.lower():
        cleaned = f"{banner}\n\n{cleaned}"

    return cleaned


def bound_content(text: str, max_length: int) -> str:
    """Truncate text to at most max_length characters."""
    if len(text) <= max_length:
        return text
    return text[:max_length].rstrip()


def is_job_posting_content(text: str) -> bool:
    """
    Check whether text looks like a job posting.

    Args:
        text: Text to check.

    Returns:
        True if at least three job-related keywords appear.
    """
    lowered = (text or "").lower()
    hits = sum(1 for keyword in JOB_KEYWORDS if keyword in lowered)
    return hits >= MIN_JOB_KEYWORDS
