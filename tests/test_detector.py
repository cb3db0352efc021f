"""Tests for upload validation."""

import pytest

from resume_builder.config import ExtractionConfig
from resume_builder.detector import UploadValidator
from resume_builder.exceptions import (
    FileTooLargeError,
    InputError,
    MissingFileError,
    UnsupportedTypeError,
)


def test_missing_file_rejected():
    with pytest.raises(MissingFileError) as excinfo:
        UploadValidator().validate(None, "application/pdf", "resume.pdf")
    assert excinfo.value.message == "No file provided"


def test_text_file_rejected():
    with pytest.raises(UnsupportedTypeError) as excinfo:
        UploadValidator().validate(b"hello", "text/plain", "resume.txt")
    assert excinfo.value.message.startswith("Invalid file type")


@pytest.mark.parametrize(
    "mime_type, file_name",
    [
        ("application/pdf", "resume"),
        ("application/x-pdf", ""),
        ("application/octet-stream", "RESUME.PDF"),
        ("", "cv.Pdf"),
        (None, "cv.pdf"),
    ],
)
def test_pdf_accepted_by_type_or_extension(mime_type, file_name):
    document = UploadValidator().validate(b"%PDF-1.4", mime_type, file_name)
    assert document.data == b"%PDF-1.4"
    assert document.file_name == (file_name or "")


def test_size_limit_is_inclusive():
    validator = UploadValidator(ExtractionConfig(max_upload_bytes=10))

    assert validator.validate(b"x" * 10, "application/pdf", "a.pdf").size == 10
    with pytest.raises(FileTooLargeError):
        validator.validate(b"x" * 11, "application/pdf", "a.pdf")


def test_default_limit_is_ten_megabytes():
    with pytest.raises(FileTooLargeError) as excinfo:
        UploadValidator().validate(b"\x00" * (10 * 1024 * 1024 + 1), "application/pdf", "a.pdf")

    assert excinfo.value.message == "File too large. Please upload a file smaller than 10MB."
    assert isinstance(excinfo.value, InputError)


def test_type_checked_before_size():
    validator = UploadValidator(ExtractionConfig(max_upload_bytes=1))
    with pytest.raises(UnsupportedTypeError):
        validator.validate(b"too big and wrong", "text/plain", "notes.txt")
