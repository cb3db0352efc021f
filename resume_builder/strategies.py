"""Text-extraction strategies for uploaded PDFs.

The structured parser understands the PDF object format (PyMuPDF). The other
strategies treat the upload as opaque bytes and scrape whatever readable
text they can find; each one reads the full buffer independently.
"""

import re
import string
from dataclasses import dataclass, field
from typing import Protocol

import fitz  # PyMuPDF

from resume_builder.cleaning import clean_printable, collapse_whitespace
from resume_builder.logger import get_logger
from resume_builder.models import DocumentInfo

logger = get_logger(__name__)

# Text immediately preceding a text-show operator: ... Hello world Tj
TEXT_SHOW_OPERATOR = "Tj"
TEXT_SHOW_CHARS = frozenset(string.ascii_letters + string.digits + ".,;:!?'\"()-")
# Operands are read backwards from the operator, at most this many characters
MAX_TEXT_SHOW_OPERAND = 512
NON_PRINTABLE_BYTES_RE = re.compile(rb"[^\x20-\x7E\t\n\r]+")


@dataclass
class ParsedPDF:
    text: str
    pages: int = 1
    info: DocumentInfo = field(default_factory=DocumentInfo)


class StructuredParser(Protocol):
    """A parser that understands the PDF format."""

    def available(self) -> bool:
        """Whether the parser can run in this process."""
        ...

    def parse(self, data: bytes) -> ParsedPDF:
        """Extract text from all pages; raise on any failure."""
        ...


class PyMuPDFParser:
    """Structured PDF parsing with PyMuPDF."""

    def available(self) -> bool:
        # Creating an empty document exercises the MuPDF bindings
        try:
            fitz.open().close()
        except Exception as exc:
            logger.warning(
                "PyMuPDF is not usable, structured parsing disabled",
                extra_data={"error_type": type(exc).__name__, "error": str(exc)},
            )
            return False
        return True

    def parse(self, data: bytes) -> ParsedPDF:
        with fitz.open(stream=data, filetype="pdf") as doc:
            if doc.needs_pass:
                raise ValueError("PDF is password-protected")

            page_texts = [page.get_text("text") for page in doc]
            metadata = doc.metadata or {}

            return ParsedPDF(
                text="\n".join(page_texts),
                pages=max(doc.page_count, 1),
                info=DocumentInfo(
                    title=(metadata.get("title") or "").strip(),
                    author=(metadata.get("author") or "").strip(),
                    subject=(metadata.get("subject") or "").strip(),
                ),
            )


def decode_as(data: bytes, encoding: str) -> str:
    """Decode the whole buffer as text and keep only printable characters."""
    return clean_printable(data.decode(encoding, errors="replace"))


def scan_text_patterns(data: bytes) -> str:
    """Collect literal strings and text-show operands from the raw PDF body."""
    body = data.decode("latin-1")
    fragments: list[str] = []

    fragments.extend(
        literal for literal in _literal_strings(body) if len(literal) > 2
    )
    fragments.extend(
        operand for operand in _text_show_operands(body) if len(operand) > 1
    )

    return clean_printable(" ".join(fragments))


def _literal_strings(body: str) -> list[str]:
    """Contents of ``(...)`` literal strings, up to the first closing paren."""
    literals: list[str] = []
    pos = 0

    while True:
        open_at = body.find("(", pos)
        if open_at == -1:
            break
        close_at = body.find(")", open_at + 1)
        if close_at == -1:
            break
        if close_at > open_at + 1:
            literals.append(body[open_at + 1:close_at])
            pos = close_at + 1
        else:
            pos = open_at + 1

    return literals


def _is_operand_char(char: str) -> bool:
    return char in TEXT_SHOW_CHARS or char.isspace()


def _text_show_operands(body: str) -> list[str]:
    """Operands of ``Tj`` operators, read backwards from each operator.

    An operand is the run of letters, digits, punctuation and whitespace
    between a whitespace character and the whitespace before ``Tj``. Each
    scan stops at the previous operator and at ``MAX_TEXT_SHOW_OPERAND``
    characters, so the work is linear in the body length.
    """
    operands: list[str] = []
    floor = 0
    index = body.find(TEXT_SHOW_OPERATOR)

    while index != -1:
        end = index
        while end > floor and body[end - 1].isspace():
            end -= 1

        if end < index:
            start = end
            limit = max(floor, end - MAX_TEXT_SHOW_OPERAND)
            while start > limit and _is_operand_char(body[start - 1]):
                start -= 1

            run = body[start:end]
            # The operand has to follow whitespace
            if start == 0 or not body[start - 1].isspace():
                head = next((i for i, char in enumerate(run) if char.isspace()), len(run))
                run = run[head:]

            operand = run.strip()
            if operand:
                operands.append(operand)

        floor = index + len(TEXT_SHOW_OPERATOR)
        index = body.find(TEXT_SHOW_OPERATOR, floor)

    return operands


def scan_printable_bytes(data: bytes) -> str:
    """Keep printable ASCII bytes; each run of other bytes becomes one space."""
    kept = NON_PRINTABLE_BYTES_RE.sub(b" ", data)
    return collapse_whitespace(kept.decode("ascii"))
