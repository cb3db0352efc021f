"""End-to-end tests for the HTTP API."""

import time

import pytest
from fastapi.testclient import TestClient

from resume_builder.api import create_app
from resume_builder.handler import DocumentHandler
from resume_builder.renderer import ResumeRenderer


@pytest.fixture
def client():
    return TestClient(create_app())


def upload(client, name, content, content_type="application/pdf"):
    return client.post("/api/parse-pdf", files={"file": (name, content, content_type)})


def assert_json_no_cache(response):
    assert response.headers["content-type"].startswith("application/json")
    assert response.headers["cache-control"] == "no-cache"


# ---------------------------------------------------------------------------
# /api/parse-pdf
# ---------------------------------------------------------------------------

def test_parse_valid_pdf(client, resume_pdf):
    response = upload(client, "jane.pdf", resume_pdf)

    assert response.status_code == 200
    assert_json_no_cache(response)
    body = response.json()
    assert "Senior Software Engineer" in body["text"]
    assert body["pages"] >= 1
    assert body["info"] == {"title": "Jane Doe Resume", "author": "Jane Doe", "subject": "CV"}


def test_parse_rejects_large_upload(client):
    response = upload(client, "big.pdf", b"0" * (15 * 1024 * 1024))

    assert response.status_code == 400
    assert_json_no_cache(response)
    assert response.json()["error"].startswith("File too large")


def test_parse_rejects_text_file(client):
    response = upload(client, "resume.txt", b"Jane Doe, engineer", "text/plain")

    assert response.status_code == 400
    assert_json_no_cache(response)
    assert response.json() == {"error": "Invalid file type. Please upload a PDF file."}


def test_parse_accepts_pdf_extension_with_generic_type(client, resume_pdf):
    response = upload(client, "JANE.PDF", resume_pdf, "application/octet-stream")
    assert response.status_code == 200


def test_parse_zero_bytes_has_no_readable_text(client):
    response = upload(client, "scan.pdf", b"\x00" * 1024)

    assert response.status_code == 400
    assert_json_no_cache(response)
    body = response.json()
    assert body["error"].startswith("No readable text found")
    assert "DOCX or TXT" in body["error"]
    assert "details" in body


@pytest.mark.parametrize("content", [b" " * 65536, b"\xa0" * 65536], ids=["spaces", "nbsp"])
def test_parse_whitespace_upload_fails_fast(client, content):
    start = time.perf_counter()
    response = upload(client, "scan.pdf", content)

    assert time.perf_counter() - start < 5
    assert response.status_code == 400
    assert response.json()["error"].startswith("No readable text found")


def test_parse_without_file(client):
    response = client.post(
        "/api/parse-pdf", files={"attachment": ("jane.pdf", b"%PDF", "application/pdf")}
    )

    assert response.status_code == 400
    assert_json_no_cache(response)
    assert response.json() == {"error": "No file provided"}


def test_parse_unexpected_error_is_500(resume_pdf):
    class BrokenHandler(DocumentHandler):
        def extract(self, file_bytes, mime_type, file_name):
            raise RuntimeError("disk on fire")

    client = TestClient(create_app(handler=BrokenHandler()))
    response = upload(client, "jane.pdf", resume_pdf)

    assert response.status_code == 500
    assert_json_no_cache(response)
    body = response.json()
    assert body["error"].startswith("PDF parsing service encountered an error")
    assert body["details"] == "disk on fire"


def test_request_id_is_echoed(client, resume_pdf):
    response = client.post(
        "/api/parse-pdf",
        files={"file": ("jane.pdf", resume_pdf, "application/pdf")},
        headers={"X-Request-ID": "req-123"},
    )
    assert response.headers["x-request-id"] == "req-123"


def test_request_id_is_generated(client):
    response = client.get("/health")
    assert response.headers["x-request-id"]


# ---------------------------------------------------------------------------
# Health, templates, CORS
# ---------------------------------------------------------------------------

def test_health(client):
    response = client.get("/health")
    assert response.json() == {"status": "ok", "structured_parser": True}


def test_list_templates(client):
    body = client.get("/api/templates").json()

    assert body["templates"] == ["modern", "classic", "minimal", "creative", "executive", "technical"]
    assert body["default"] == "modern"


def test_cors_preflight(client):
    response = client.options(
        "/api/parse-pdf",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "POST",
        },
    )
    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "*"


# ---------------------------------------------------------------------------
# /api/render
# ---------------------------------------------------------------------------

def test_render_pdf(client, resume_data):
    response = client.post("/api/render", json=resume_data.model_dump(by_alias=True))

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert response.headers["content-disposition"] == 'attachment; filename="Jane_Doe.pdf"'
    assert response.content.startswith(b"%PDF")


def test_render_html(client, resume_data):
    response = client.post(
        "/api/render", params={"format": "html"}, json=resume_data.model_dump(by_alias=True)
    )

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "window.print()" in response.text
    assert "Jane Doe" in response.text


def test_render_falls_back_to_print_view(resume_data):
    class NoPdfRenderer(ResumeRenderer):
        def _layout_pdf(self, body, css):
            raise RuntimeError("no layout engine")

    client = TestClient(create_app(renderer=NoPdfRenderer()))
    response = client.post("/api/render", json=resume_data.model_dump(by_alias=True))

    assert response.status_code == 200
    assert response.headers["x-render-fallback"] == "print"
    assert response.headers["content-type"].startswith("text/html")
    assert response.headers["content-disposition"].startswith("inline")


def test_render_requires_personal_info(client):
    response = client.post("/api/render", json={"selectedTemplate": "modern"})

    assert response.status_code == 400
    assert response.json() == {"error": "Resume data must include personal information."}


def test_render_rejects_unknown_format(client, resume_data):
    response = client.post(
        "/api/render", params={"format": "docx"}, json=resume_data.model_dump(by_alias=True)
    )

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid request"
