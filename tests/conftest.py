"""Shared fixtures: in-memory PDFs built with PyMuPDF and sample resume data."""

from __future__ import annotations

import fitz
import pytest

from resume_builder.resume import ResumeData

RESUME_TEXT = (
    "Jane Doe\n"
    "Senior Software Engineer\n"
    "Built Distributed Systems at Acme Corp\n"
    "Python FastAPI PostgreSQL Kubernetes"
)


def make_pdf(pages: list[str], metadata: dict | None = None) -> bytes:
    doc = fitz.open()
    for text in pages:
        page = doc.new_page()
        page.insert_text((72, 72), text, fontsize=11)
    if metadata:
        doc.set_metadata(metadata)
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def resume_pdf() -> bytes:
    return make_pdf(
        [RESUME_TEXT, "Education\nBSc Computer Science, State University"],
        metadata={"title": "Jane Doe Resume", "author": "Jane Doe", "subject": "CV"},
    )


@pytest.fixture
def untitled_pdf() -> bytes:
    return make_pdf([RESUME_TEXT])


@pytest.fixture
def resume_data() -> ResumeData:
    return ResumeData.model_validate(
        {
            "personalInfo": {
                "fullName": "Jane Doe",
                "email": "jane@example.com",
                "phone": "+1 555 0100",
                "location": "Berlin",
                "summary": "Backend engineer focused on reliable services.",
            },
            "experience": [
                {
                    "title": "Senior Engineer",
                    "company": "Acme Corp",
                    "startDate": "2020",
                    "current": True,
                    "description": "Owned the billing platform.",
                    "achievements": ["Cut invoice latency by 40%"],
                }
            ],
            "education": [
                {
                    "degree": "BSc Computer Science",
                    "institution": "State University",
                    "graduationDate": "2016",
                }
            ],
            "skills": ["Python", "PostgreSQL"],
            "projects": [
                {"name": "pdfscan", "description": "PDF text tools", "technologies": ["Python"]}
            ],
            "certifications": [{"name": "CKA", "issuer": "CNCF", "date": "2022"}],
            "selectedTemplate": "modern",
        }
    )
