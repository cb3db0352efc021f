"""Degrading PDF text-extraction pipeline."""

from functools import partial
from typing import Callable, Optional

from resume_builder.cleaning import normalize_text
from resume_builder.config import ExtractionConfig
from resume_builder.exceptions import ExtractionFailure
from resume_builder.logger import Timer, get_logger
from resume_builder.models import (
    DocumentInfo,
    ExtractionAttempt,
    ExtractionResult,
    RawDocument,
)
from resume_builder.strategies import (
    ParsedPDF,
    PyMuPDFParser,
    StructuredParser,
    decode_as,
    scan_printable_bytes,
    scan_text_patterns,
)

logger = get_logger(__name__)

STRUCTURED = "structured"
PIPELINE_ORDER = (
    STRUCTURED,
    "decode_primary",
    "decode_secondary",
    "pattern_scan",
    "printable_scan",
)


class ExtractionPipeline:
    """Ordered, short-circuiting fallback chain over one PDF buffer.

    The structured parser runs first. If it fails or yields too little text,
    the byte-level strategies run in ``PIPELINE_ORDER`` until one clears the
    intermediate threshold. Whatever text wins must still clear the final
    floor after normalization, otherwise ``ExtractionFailure`` is raised.
    """

    def __init__(
        self,
        config: Optional[ExtractionConfig] = None,
        structured_parser: Optional[StructuredParser] = None,
    ):
        """Initialize the pipeline.

        Args:
            config: Extraction configuration. If None, uses defaults.
            structured_parser: PDF-aware parser. If None and structured
                parsing is enabled, PyMuPDF is used. The parser is checked
                once here; an unusable parser is dropped for the lifetime of
                the pipeline.
        """
        self.config = config or ExtractionConfig()

        if not self.config.enable_structured_parse:
            structured_parser = None
        elif structured_parser is None:
            structured_parser = PyMuPDFParser()

        if structured_parser is not None and not structured_parser.available():
            structured_parser = None
        self.structured_parser = structured_parser

        self.fallback_strategies: list[tuple[str, Callable[[bytes], str]]] = [
            ("decode_primary", partial(decode_as, encoding=self.config.primary_encoding)),
            ("decode_secondary", partial(decode_as, encoding=self.config.secondary_encoding)),
            ("pattern_scan", scan_text_patterns),
            ("printable_scan", scan_printable_bytes),
        ]

        logger.info(
            "Initialized extraction pipeline",
            extra_data={
                "structured_parser": type(self.structured_parser).__name__
                if self.structured_parser
                else None,
                "min_intermediate_chars": self.config.min_intermediate_chars,
                "min_final_chars": self.config.min_final_chars,
            },
        )

    @property
    def has_structured_parser(self) -> bool:
        return self.structured_parser is not None

    @property
    def strategy_names(self) -> list[str]:
        """Names of the strategies this pipeline will try, in order."""
        names = [STRUCTURED] if self.structured_parser else []
        return names + [name for name, _ in self.fallback_strategies]

    def extract(self, document: RawDocument) -> ExtractionResult:
        """Extract normalized text from a PDF buffer.

        Raises:
            ExtractionFailure: If no strategy produced readable text
        """
        attempts: list[ExtractionAttempt] = []
        parsed: Optional[ParsedPDF] = None
        accepted: Optional[ExtractionAttempt] = None

        with Timer("extraction_pipeline") as timer:
            if self.structured_parser is not None:
                attempt, parsed = self._run_structured(document)
                attempts.append(attempt)
                if attempt.success:
                    accepted = attempt

            if accepted is None:
                for name, strategy in self.fallback_strategies:
                    attempt = self._run_fallback(name, strategy, document)
                    attempts.append(attempt)
                    if attempt.success:
                        accepted = attempt
                        break

        # Nothing cleared its threshold; the longest candidate still gets
        # measured against the final floor.
        candidate = accepted or max(attempts, key=lambda a: len(a.text))
        text = normalize_text(candidate.text)

        if len(text) < self.config.min_final_chars:
            logger.warning(
                "No readable text extracted from document",
                extra_data={
                    "file_name": document.file_name,
                    "file_size_bytes": document.size,
                    "strategies_tried": len(attempts),
                    "pipeline_time_ms": timer.get_elapsed_ms(),
                },
            )
            raise ExtractionFailure(details=self._describe_attempts(attempts))

        pages = parsed.pages if parsed else 1
        info = parsed.info if parsed else DocumentInfo()
        if not info.title:
            info = DocumentInfo(
                title=document.file_name or "Resume",
                author=info.author,
                subject=info.subject,
            )

        logger.info(
            "Extraction pipeline completed",
            extra_data={
                "file_name": document.file_name,
                "strategy": candidate.strategy,
                "accepted": accepted is not None,
                "characters_extracted": len(text),
                "pages": pages,
                "pipeline_time_ms": timer.get_elapsed_ms(),
            },
        )

        return ExtractionResult(
            text=text,
            pages=pages,
            info=info,
            strategy=candidate.strategy,
            attempts=attempts,
        )

    def _run_structured(
        self, document: RawDocument
    ) -> tuple[ExtractionAttempt, Optional[ParsedPDF]]:
        try:
            with Timer(STRUCTURED) as timer:
                raw = self.structured_parser.parse(document.data)
                text = normalize_text(raw.text)
                pages = max(int(raw.pages), 1)
                info = raw.info or DocumentInfo()
                parsed = ParsedPDF(
                    text=text,
                    pages=pages,
                    info=DocumentInfo(
                        title=info.title or "",
                        author=info.author or "",
                        subject=info.subject or "",
                    ),
                )
        except Exception as exc:
            logger.warning(
                "Structured PDF parse failed, falling back to byte strategies",
                extra_data={
                    "file_name": document.file_name,
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                },
            )
            return ExtractionAttempt(strategy=STRUCTURED, error=str(exc)), None

        # A real parse is trusted down to the final floor
        success = len(text) >= self.config.min_final_chars

        logger.debug(
            "Structured PDF parse completed",
            extra_data={
                "file_name": document.file_name,
                "characters_extracted": len(text),
                "page_count": pages,
                "accepted": success,
                "extraction_time_ms": timer.get_elapsed_ms(),
            },
        )
        return ExtractionAttempt(strategy=STRUCTURED, text=text, success=success), parsed

    def _run_fallback(
        self,
        name: str,
        strategy: Callable[[bytes], str],
        document: RawDocument,
    ) -> ExtractionAttempt:
        try:
            with Timer(name) as timer:
                text = normalize_text(strategy(document.data))
        except Exception as exc:
            logger.warning(
                f"Extraction strategy {name} failed",
                extra_data={
                    "file_name": document.file_name,
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                },
                exc_info=True,
            )
            return ExtractionAttempt(strategy=name, error=str(exc))

        success = len(text) >= self.config.min_intermediate_chars
        logger.debug(
            f"Extraction strategy {name} completed",
            extra_data={
                "file_name": document.file_name,
                "characters_extracted": len(text),
                "accepted": success,
                "extraction_time_ms": timer.get_elapsed_ms(),
            },
        )
        return ExtractionAttempt(strategy=name, text=text, success=success)

    @staticmethod
    def _describe_attempts(attempts: list[ExtractionAttempt]) -> str:
        parts = []
        for attempt in attempts:
            if attempt.error:
                parts.append(f"{attempt.strategy}: {attempt.error}")
            else:
                parts.append(f"{attempt.strategy}: {len(attempt.text)} chars")
        return "; ".join(parts)
