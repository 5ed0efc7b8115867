"""Pydantic schemas for resume layout and export endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field

from resume_builder.services.resume_data import ResumeRecord


class PersonalInfoModel(BaseModel):
    """Name, headline and contact details."""

    first_name: str = Field("", description="Given name")
    last_name: str = Field("", description="Family name")
    job_title: str = Field("", description="Headline shown under the name")
    address: str = ""
    email: str = ""
    phone: str = ""
    website: str = ""
    bio: str = Field("", description="Profile paragraph")


class ExperienceModel(BaseModel):
    """A single work-experience entry."""

    title: str = ""
    company: str = ""
    location: str = ""
    start_date: str = Field("", description="ISO date (YYYY-MM[-DD]) or free text")
    end_date: str = ""
    current: bool = Field(False, description="Still in this role; shown as Present")
    description: str = ""


class EducationModel(BaseModel):
    """A single education entry."""

    degree: str = ""
    institution: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    description: str = ""


class LanguageModel(BaseModel):
    language: str
    proficiency: str = ""


class ResumeRecordModel(BaseModel):
    """The whole resume, replaced on every edit."""

    personal: PersonalInfoModel = Field(default_factory=PersonalInfoModel)
    experience: list[ExperienceModel] = Field(default_factory=list)
    education: list[EducationModel] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    languages: list[LanguageModel] = Field(default_factory=list)

    def to_record(self) -> ResumeRecord:
        return ResumeRecord(**self.model_dump())


class LayoutRequest(BaseModel):
    """Request schema for paginating, previewing or exporting a resume."""

    record: ResumeRecordModel = Field(..., description="Resume content")
    template: str | None = Field(None, description="Style variant; unknown values use the default")
    grayscale: bool = Field(False, description="Export with colours mapped to grey")


class SectionSliceResponse(BaseModel):
    section: str
    items: list[int]
    is_continuation: bool


class PageResponse(BaseModel):
    """Content window of one page."""

    page_number: int
    sections: list[SectionSliceResponse]
    used_height: float
    capacity: float
    overflow: bool


class LayoutResponse(BaseModel):
    """Page assignment of a resume."""

    template: str = Field(..., description="Style variant actually used")
    total_pages: int
    is_fallback: bool = Field(..., description="Measurement was incomplete; single page")
    completion: int = Field(..., description="Editor progress percentage")
    pages: list[PageResponse]


class TemplateSummary(BaseModel):
    key: str = Field(..., description="Identifier accepted by the layout endpoints")
    name: str = Field(..., description="Display name")


class TemplateListResponse(BaseModel):
    templates: list[TemplateSummary]
    default: str
