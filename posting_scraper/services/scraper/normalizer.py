# =============================================================================
# HTML To Text Normalizer
# =============================================================================
"""
Convert raw (possibly malformed) HTML into a single line of plain text.

Steps run in a fixed order:
1. drop <script> and <style> blocks with their content
2. drop HTML comments
3. replace every remaining tag with a space
4. decode the common named entities and numeric entities
5. collapse whitespace and trim

The normalizer never raises. Any internal failure yields an empty string,
which callers treat as "no result" rather than "page without text".
"""

import logging
import re


# -----------------------------------------------------------------------------
# Logging Configuration
# -----------------------------------------------------------------------------
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Patterns
# -----------------------------------------------------------------------------
_SCRIPT_STYLE_RE = re.compile(
    r"<(script|style)\b[^>]*>.*?</\1\s*>",
    re.IGNORECASE | re.DOTALL,
)
_COMMENT_RE = re.compile(r"<!--.*?-->", re.DOTALL)
# Only tag-shaped sequences; a bare "<" or ">" in prose is text.
_TAG_RE = re.compile(r"</?[A-Za-z!?][^<>]*>")
_ENTITY_RE = re.compile(
    r"&(?:#[xX]([0-9A-Fa-f]+)|#([0-9]+)|(nbsp|amp|lt|gt|quot|apos));"
)
_WS_RE = re.compile(r"\s+")

_NAMED_ENTITIES = {
    "nbsp": " ",
    "amp": "&",
    "lt": "<",
    "gt": ">",
    "quot": '"',
    "apos": "'",
}


def _decode_entity(match: re.Match) -> str:
    """Decode one entity; leave it untouched if the code point is invalid."""
    hex_value, dec_value, name = match.groups()
    if name:
        return _NAMED_ENTITIES[name]

    try:
        code_point = int(hex_value, 16) if hex_value else int(dec_value)
        return chr(code_point)
    except (ValueError, OverflowError):
        return match.group(0)


def decode_entities(text: str) -> str:
    """
    Decode the supported HTML entities in a single pass.

    A single pass keeps ``&amp;lt;`` as the literal ``&lt;`` instead of
    decoding it twice.

    Args:
        text: Text containing entity sequences.

    Returns:
        Text with entities replaced by their characters.
    """
    return _ENTITY_RE.sub(_decode_entity, text)


def html_to_text(raw_html: str) -> str:
    """
    Strip markup from HTML and return normalized plain text.

    Args:
        raw_html: Raw HTML string.

    Returns:
        Plain text with collapsed whitespace, or an empty string if the input
        is empty or could not be processed.
    """
    if not raw_html:
        return ""

    try:
        content = _SCRIPT_STYLE_RE.sub("", raw_html)
        content = _COMMENT_RE.sub("", content)
        content = _TAG_RE.sub(" ", content)
        content = decode_entities(content)
        return _WS_RE.sub(" ", content).strip()
    except Exception as e:
        logger.warning(f"HTML normalization failed: {e}")
        return ""
