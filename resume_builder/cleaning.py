"""Text cleaning shared by the extraction strategies."""

import re

# Anything other than printable ASCII, tab, newline and carriage return
NON_PRINTABLE_RE = re.compile(r"[^\x20-\x7E\n\r\t]")
CONTROL_CHARS_RE = re.compile(r"[\x01-\x08\x0B\x0C\x0E-\x1F\x7F-\x9F]")
WHITESPACE_RE = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    return WHITESPACE_RE.sub(" ", text).strip()


def clean_printable(text: str) -> str:
    """Replace non-printable characters with spaces, collapse whitespace, trim."""
    return collapse_whitespace(NON_PRINTABLE_RE.sub(" ", text))


def normalize_text(text: str) -> str:
    """Final normalization applied to whatever text the pipeline accepted.

    Drops NUL bytes, replaces remaining control characters with spaces,
    collapses whitespace and trims. Idempotent.
    """
    text = text.replace("\x00", "")
    text = CONTROL_CHARS_RE.sub(" ", text)
    return collapse_whitespace(text)
