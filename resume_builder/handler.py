"""Document handler orchestration."""

from typing import Optional

from resume_builder.config import ExtractionConfig
from resume_builder.detector import UploadValidator
from resume_builder.extractor import ExtractionPipeline
from resume_builder.logger import Timer, get_logger
from resume_builder.models import ExtractionResult

logger = get_logger(__name__)


class DocumentHandler:
    def __init__(
        self,
        validator: Optional[UploadValidator] = None,
        pipeline: Optional[ExtractionPipeline] = None,
        config: Optional[ExtractionConfig] = None,
    ) -> None:
        """Initialize document handler.

        Args:
            validator: Upload validator. If None, creates default with config.
            pipeline: Extraction pipeline. If None, creates default with config.
            config: Extraction configuration. Only used for components not
                passed in explicitly.
        """
        self.config = config or ExtractionConfig()
        self.validator = validator or UploadValidator(self.config)
        self.pipeline = pipeline or ExtractionPipeline(self.config)

    def extract(
        self,
        file_bytes: Optional[bytes],
        mime_type: Optional[str],
        file_name: Optional[str],
    ) -> ExtractionResult:
        """Validate an upload and extract its text.

        Args:
            file_bytes: Raw upload content, None when no file was sent
            mime_type: Declared media type
            file_name: Original filename

        Returns:
            ExtractionResult with cleaned text, page count and metadata

        Raises:
            InputError: If the upload is missing, not a PDF, or too large
            ExtractionFailure: If no readable text could be extracted
        """
        with Timer("validation") as validate_timer:
            document = self.validator.validate(file_bytes, mime_type, file_name)

        logger.debug(
            "Upload validation completed",
            extra_data={
                "file_name": document.file_name,
                "validation_time_ms": validate_timer.get_elapsed_ms(),
            },
        )

        with Timer("extraction") as extract_timer:
            result = self.pipeline.extract(document)

        logger.info(
            "Successfully extracted text from document",
            extra_data={
                "file_name": document.file_name,
                "strategy": result.strategy,
                "character_count": len(result.text),
                "pages": result.pages,
                "extraction_time_ms": extract_timer.get_elapsed_ms(),
            },
        )

        return result
