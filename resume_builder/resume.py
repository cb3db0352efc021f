"""Pydantic models for structured resume data.

Field names are snake_case in Python; the JSON wire format uses camelCase
(``personalInfo``, ``selectedTemplate``, ...). Both spellings are accepted.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _ResumeModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PersonalInfo(_ResumeModel):
    full_name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin: str = ""
    website: str = ""
    summary: str = ""


class Experience(_ResumeModel):
    title: str = ""
    company: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    description: str = ""
    achievements: list[str] = Field(default_factory=list)

    @property
    def period(self) -> str:
        end = "Present" if self.current else self.end_date
        return " - ".join(part for part in (self.start_date, end) if part)


class Education(_ResumeModel):
    degree: str = ""
    institution: str = ""
    location: str = ""
    graduation_date: str = ""
    gpa: str = ""


class Project(_ResumeModel):
    name: str = ""
    description: str = ""
    technologies: list[str] = Field(default_factory=list)
    link: str = ""


class Certification(_ResumeModel):
    name: str = ""
    issuer: str = ""
    date: str = ""


class ResumeData(_ResumeModel):
    personal_info: Optional[PersonalInfo] = None
    experience: list[Experience] = Field(default_factory=list)
    education: list[Education] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    projects: list[Project] = Field(default_factory=list)
    certifications: list[Certification] = Field(default_factory=list)
    selected_template: str = "modern"

    @property
    def display_name(self) -> str:
        if self.personal_info and self.personal_info.full_name.strip():
            return self.personal_info.full_name.strip()
        return "Resume"

    @property
    def file_stem(self) -> str:
        """Base name for exported files, e.g. ``Jane_Doe``."""
        return "_".join(self.display_name.split())
