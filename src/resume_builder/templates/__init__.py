"""Template registry for resume style variants."""

from __future__ import annotations

import logging

from resume_builder.config import get_settings
from resume_builder.templates.academic import AcademicResumeTemplate
from resume_builder.templates.base import ResumeTemplate
from resume_builder.templates.creative import CreativeResumeTemplate
from resume_builder.templates.executive import ExecutiveResumeTemplate
from resume_builder.templates.minimal import MinimalResumeTemplate
from resume_builder.templates.modern import ModernResumeTemplate
from resume_builder.templates.professional import ProfessionalResumeTemplate

__all__ = [
    "DEFAULT_TEMPLATE",
    "ResumeTemplate",
    "get_template",
    "list_templates",
]

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = "professional"

_REGISTRY: dict[str, ResumeTemplate] = {
    "professional": ProfessionalResumeTemplate(),
    "modern": ModernResumeTemplate(),
    "minimal": MinimalResumeTemplate(),
    "creative": CreativeResumeTemplate(),
    "executive": ExecutiveResumeTemplate(),
    "academic": AcademicResumeTemplate(),
}


def _default_key() -> str:
    configured = get_settings().default_template
    if configured in _REGISTRY:
        return configured
    return DEFAULT_TEMPLATE


def get_template(name: str | None) -> ResumeTemplate:
    """Return the template registered under *name*.

    Unknown or missing names fall back to the configured default variant.
    """
    key = (name or "").strip().lower()
    try:
        return _REGISTRY[key]
    except KeyError:
        fallback = _default_key()
        if key:
            logger.warning("Unknown template %r, using %r", name, fallback)
        return _REGISTRY[fallback]


def list_templates() -> list[str]:
    """Return sorted keys of all registered templates."""
    return sorted(_REGISTRY)
