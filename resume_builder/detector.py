"""Upload validation ahead of text extraction."""

from typing import Optional

from resume_builder.config import ExtractionConfig
from resume_builder.exceptions import (
    FileTooLargeError,
    MissingFileError,
    UnsupportedTypeError,
)
from resume_builder.logger import get_logger
from resume_builder.models import RawDocument

logger = get_logger(__name__)

PDF_SIGNATURE = b"%PDF"


class UploadValidator:
    """Checks that an upload is present, declared as a PDF, and small enough."""

    def __init__(self, config: Optional[ExtractionConfig] = None):
        self.config = config or ExtractionConfig()

    def validate(
        self,
        file_bytes: Optional[bytes],
        mime_type: Optional[str],
        file_name: Optional[str],
    ) -> RawDocument:
        """Build a RawDocument from an upload, or raise an InputError.

        The declared media type or the file name decides the type; the
        content itself is not sniffed, so a mislabelled file still reaches
        the pipeline and fails there.
        """
        if file_bytes is None:
            logger.warning("Upload rejected - no file provided")
            raise MissingFileError()

        mime_type = mime_type or ""
        file_name = file_name or ""

        if not self.is_pdf(mime_type, file_name):
            logger.warning(
                "Upload rejected - not a PDF",
                extra_data={"file_name": file_name, "mime_type": mime_type},
            )
            raise UnsupportedTypeError()

        if len(file_bytes) > self.config.max_upload_bytes:
            logger.warning(
                "Upload rejected - file too large",
                extra_data={
                    "file_name": file_name,
                    "file_size_bytes": len(file_bytes),
                    "max_upload_bytes": self.config.max_upload_bytes,
                },
            )
            raise FileTooLargeError(self.config.max_upload_bytes)

        logger.debug(
            "Upload accepted",
            extra_data={
                "file_name": file_name,
                "mime_type": mime_type,
                "file_size_bytes": len(file_bytes),
                "has_pdf_signature": file_bytes.startswith(PDF_SIGNATURE),
            },
        )

        return RawDocument(data=file_bytes, mime_type=mime_type, file_name=file_name)

    @staticmethod
    def is_pdf(mime_type: str, file_name: str) -> bool:
        return "pdf" in mime_type.lower() or file_name.lower().endswith(".pdf")
