"""Data models for the extraction pipeline."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class RawDocument:
    """An uploaded file, valid for the duration of one request."""

    data: bytes
    mime_type: str
    file_name: str

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass
class ExtractionAttempt:
    """Output of a single extraction strategy."""

    strategy: str
    text: str = ""
    success: bool = False
    error: Optional[str] = None


@dataclass
class DocumentInfo:
    title: str = ""
    author: str = ""
    subject: str = ""


@dataclass
class ExtractionResult:
    """Result of running the extraction pipeline on one document."""

    text: str
    pages: int = 1
    info: DocumentInfo = field(default_factory=DocumentInfo)
    strategy: str = ""
    attempts: list[ExtractionAttempt] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Response payload for the upload endpoint."""
        return {
            "text": self.text,
            "pages": self.pages,
            "info": {
                "title": self.info.title,
                "author": self.info.author,
                "subject": self.info.subject,
            },
        }
