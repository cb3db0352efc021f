"""Resume builder: PDF resume text extraction and template rendering."""

__version__ = "0.1.0"

from resume_builder.config import (  # noqa: E402
    AppConfig,
    ExtractionConfig,
    RenderConfig,
    load_config_from_env,
)
from resume_builder.detector import UploadValidator  # noqa: E402
from resume_builder.exceptions import (  # noqa: E402
    ExtractionFailure,
    FileTooLargeError,
    InputError,
    MissingFileError,
    RenderError,
    ResumeBuilderError,
    UnsupportedTypeError,
)
from resume_builder.extractor import PIPELINE_ORDER, ExtractionPipeline  # noqa: E402
from resume_builder.handler import DocumentHandler  # noqa: E402
from resume_builder.models import (  # noqa: E402
    DocumentInfo,
    ExtractionAttempt,
    ExtractionResult,
    RawDocument,
)
from resume_builder.parser import parse_document  # noqa: E402
from resume_builder.renderer import RenderedDocument, ResumeRenderer  # noqa: E402
from resume_builder.resume import ResumeData  # noqa: E402
from resume_builder.strategies import PyMuPDFParser  # noqa: E402

__all__ = [
    # High-level API
    "parse_document",
    # Core classes
    "DocumentHandler",
    "UploadValidator",
    "ExtractionPipeline",
    "PyMuPDFParser",
    "ResumeRenderer",
    "PIPELINE_ORDER",
    # Data models
    "RawDocument",
    "ExtractionAttempt",
    "ExtractionResult",
    "DocumentInfo",
    "ResumeData",
    "RenderedDocument",
    # Configuration
    "AppConfig",
    "ExtractionConfig",
    "RenderConfig",
    "load_config_from_env",
    # Exceptions
    "ResumeBuilderError",
    "InputError",
    "MissingFileError",
    "UnsupportedTypeError",
    "FileTooLargeError",
    "ExtractionFailure",
    "RenderError",
]
