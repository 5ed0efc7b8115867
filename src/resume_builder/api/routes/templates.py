"""Style variant routes."""

from __future__ import annotations

from fastapi import APIRouter

from resume_builder.api.schemas.resumes import TemplateListResponse, TemplateSummary
from resume_builder.templates import get_template, list_templates

router = APIRouter(prefix="/templates", tags=["templates"])


@router.get("", response_model=TemplateListResponse)
def get_templates() -> TemplateListResponse:
    """List the available style variants and the one used by default."""
    summaries = [
        TemplateSummary(key=key, name=get_template(key).name) for key in list_templates()
    ]
    return TemplateListResponse(templates=summaries, default=get_template(None).key)
