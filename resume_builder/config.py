"""Configuration classes for resume-builder."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "RESUME_BUILDER_"


@dataclass
class ExtractionConfig:
    """Configuration for the PDF text-extraction pipeline.

    Examples:
        >>> # Defaults used by the upload endpoint
        >>> config = ExtractionConfig()

        >>> # Byte heuristics only, e.g. when PyMuPDF misbehaves on a host
        >>> config = ExtractionConfig(enable_structured_parse=False)
    """

    min_intermediate_chars: int = 50
    """Minimum cleaned length for a heuristic strategy's output to be accepted.
    Shorter output moves the pipeline on to the next strategy."""

    min_final_chars: int = 10
    """Minimum length of the final normalized text. Anything shorter is
    reported as "no readable text", whichever strategy produced it."""

    max_upload_bytes: int = 10 * 1024 * 1024
    """Largest accepted upload (10 MiB)."""

    primary_encoding: str = "utf-8"
    """First direct-decoding pass."""

    secondary_encoding: str = "latin-1"
    """Second direct-decoding pass, tried when the first yields too little.
    Must be a single-byte code page so every byte maps to one character."""

    enable_structured_parse: bool = True
    """Use PyMuPDF before the byte heuristics."""


@dataclass
class RenderConfig:
    """Configuration for resume rendering and PDF export."""

    default_template: str = "modern"
    page_width: float = 595.0
    """A4 width in points."""
    page_height: float = 842.0
    """A4 height in points."""
    margin: float = 28.0
    """Page margin in points (~10mm)."""


@dataclass
class AppConfig:
    """Top-level service configuration."""

    host: str = "127.0.0.1"
    port: int = 8000
    log_level: str = "INFO"
    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)
    render: RenderConfig = field(default_factory=RenderConfig)


def _env(name: str, default: str) -> str:
    return os.getenv(ENV_PREFIX + name, default)


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def load_config_from_env(env_file: str | Path | None = None) -> AppConfig:
    """Build an AppConfig from ``RESUME_BUILDER_*`` environment variables.

    A ``.env`` file (the given path, or one found from the working directory)
    is loaded first; variables already set in the environment win.
    """
    if env_file is not None:
        load_dotenv(env_file)
    else:
        load_dotenv()

    defaults = ExtractionConfig()
    extraction = ExtractionConfig(
        min_intermediate_chars=int(
            _env("MIN_INTERMEDIATE_CHARS", str(defaults.min_intermediate_chars))
        ),
        min_final_chars=int(_env("MIN_FINAL_CHARS", str(defaults.min_final_chars))),
        max_upload_bytes=int(_env("MAX_UPLOAD_BYTES", str(defaults.max_upload_bytes))),
        primary_encoding=_env("PRIMARY_ENCODING", defaults.primary_encoding),
        secondary_encoding=_env("SECONDARY_ENCODING", defaults.secondary_encoding),
        enable_structured_parse=_env_bool(
            "ENABLE_STRUCTURED_PARSE", defaults.enable_structured_parse
        ),
    )
    render = RenderConfig(
        default_template=_env("DEFAULT_TEMPLATE", RenderConfig.default_template),
    )

    return AppConfig(
        host=_env("HOST", AppConfig.host),
        port=int(_env("PORT", str(AppConfig.port))),
        log_level=_env("LOG_LEVEL", AppConfig.log_level),
        extraction=extraction,
        render=render,
    )
