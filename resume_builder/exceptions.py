"""Custom exceptions for resume-builder."""

from typing import Optional

SUGGEST_OTHER_FORMAT = "Please try a different format (DOCX or TXT)."


class ResumeBuilderError(Exception):
    """Base exception for resume-builder errors.

    ``message`` is safe to show to the user; ``details`` carries the
    underlying cause when there is one.
    """

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        payload = {"error": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class InputError(ResumeBuilderError):
    """Raised when an upload is rejected before extraction."""

    pass


class MissingFileError(InputError):
    """Raised when no file was uploaded."""

    def __init__(self, message: str = "No file provided"):
        super().__init__(message)


class UnsupportedTypeError(InputError):
    """Raised when the upload is not declared as a PDF."""

    def __init__(self, message: str = "Invalid file type. Please upload a PDF file."):
        super().__init__(message)


class FileTooLargeError(InputError):
    """Raised when the upload exceeds the configured size limit."""

    def __init__(self, limit_bytes: int):
        limit_mb = limit_bytes // (1024 * 1024)
        super().__init__(
            f"File too large. Please upload a file smaller than {limit_mb}MB."
        )
        self.limit_bytes = limit_bytes


class ExtractionFailure(ResumeBuilderError):
    """Raised when no extraction strategy produced enough readable text."""

    def __init__(self, message: Optional[str] = None, details: Optional[str] = None):
        super().__init__(
            message
            or (
                "No readable text found in PDF. The file may be image-based "
                f"or corrupted. {SUGGEST_OTHER_FORMAT}"
            ),
            details,
        )


class RenderError(ResumeBuilderError):
    """Raised when resume data cannot be rendered into a template."""

    pass
