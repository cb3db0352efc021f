"""High-level API for PDF text extraction."""

import mimetypes
from pathlib import Path
from typing import Optional

from resume_builder.config import ExtractionConfig
from resume_builder.handler import DocumentHandler
from resume_builder.models import ExtractionResult


def parse_document(
    file_path: Optional[str] = None,
    file_bytes: Optional[bytes] = None,
    file_name: Optional[str] = None,
    mime_type: Optional[str] = None,
    config: Optional[ExtractionConfig] = None,
) -> ExtractionResult:
    """Extract text from a PDF resume.

    Convenience function that accepts either a file path or raw bytes and
    applies the same validation as the upload endpoint.

    Args:
        file_path: Path to a PDF file (alternative to file_bytes)
        file_bytes: Raw PDF bytes (alternative to file_path)
        file_name: Original filename (required if using file_bytes)
        mime_type: Declared media type (guessed from the name if not provided)
        config: Extraction configuration (optional, uses defaults if not provided)

    Returns:
        ExtractionResult with cleaned text, page count and metadata

    Raises:
        ValueError: If neither or both of file_path and file_bytes are given,
            or file_bytes is given without file_name
        InputError: If the file is not a PDF or is too large
        ExtractionFailure: If no readable text could be extracted

    Examples:
        >>> result = parse_document(file_path="resume.pdf")
        >>> print(result.text)

        >>> config = ExtractionConfig(min_intermediate_chars=80)
        >>> with open("resume.pdf", "rb") as f:
        ...     result = parse_document(
        ...         file_bytes=f.read(), file_name="resume.pdf", config=config
        ...     )
    """
    if file_path and file_bytes is not None:
        raise ValueError("Provide either file_path or file_bytes, not both")

    if not file_path and file_bytes is None:
        raise ValueError("Must provide either file_path or file_bytes")

    if file_path:
        path = Path(file_path)
        if not path.exists():
            raise ValueError(f"File not found: {file_path}")

        file_bytes = path.read_bytes()
        file_name = path.name

    if not file_name:
        raise ValueError("file_name is required when using file_bytes")

    if not mime_type:
        guessed_type, _ = mimetypes.guess_type(file_name)
        mime_type = guessed_type or ""

    handler = DocumentHandler(config=config)
    return handler.extract(file_bytes, mime_type, file_name)
