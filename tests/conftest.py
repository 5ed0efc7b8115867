from __future__ import annotations

from collections.abc import Callable

import pytest

from resume_builder.constants.layout_constants import SectionName
from resume_builder.models.pagination import MeasuredHeights, Section
from resume_builder.services.resume_data import ResumeRecord, sample_resume
from resume_builder.services.surface import RenderSurface

_ENV_VARS = (
    "RESUME_PAGE_WIDTH_PX",
    "RESUME_PAGE_MARGIN_PX",
    "RESUME_COALESCE_MS",
    "RESUME_DEFAULT_TEMPLATE",
    "RESUME_LOG_LEVEL",
    "RESUME_PRINT_COMMAND",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep settings from a developer's shell or .env out of the tests."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def record() -> ResumeRecord:
    return sample_resume()


@pytest.fixture
def long_record() -> ResumeRecord:
    """A resume long enough to need several A4 pages."""
    data = sample_resume()
    description = (
        "Led discovery workshops with stakeholders, mapped service blueprints "
        "and turned research findings into prioritised roadmaps. "
    ) * 4
    data["experience"] = [
        {
            "title": f"Service Designer {i + 1}",
            "company": f"Company {i + 1}",
            "location": "Toronto, ON",
            "start_date": f"20{10 + i:02d}-01",
            "end_date": f"20{11 + i:02d}-06",
            "description": description,
        }
        for i in range(9)
    ]
    data["education"] = [
        {
            "degree": f"Degree {i + 1}",
            "institution": "University of British Columbia",
            "location": "Kelowna, BC",
            "start_date": "2008-09",
            "end_date": "2012-04",
            "description": description,
        }
        for i in range(3)
    ]
    return data


@pytest.fixture
def surface() -> RenderSurface:
    return RenderSurface(page_width=794, margin=40)


HeightsFactory = Callable[..., tuple[list[Section], MeasuredHeights]]


@pytest.fixture
def make_heights() -> HeightsFactory:
    """Build sections and matching heights from plain numbers.

    Keyword arguments are section names. A number is a single-block
    section, a list is a multi-item section's entry heights.
    """

    def factory(
        *,
        header: float = 0.0,
        first_page_header: float = 0.0,
        continuation_page_header: float = 0.0,
        **values: float | list[float],
    ) -> tuple[list[Section], MeasuredHeights]:
        sections: list[Section] = []
        blocks: dict[SectionName, float] = {}
        items: dict[SectionName, tuple[float, ...]] = {}
        headers: dict[SectionName, float] = {}
        for key, value in values.items():
            name = SectionName(key)
            if isinstance(value, list):
                sections.append(Section(name, len(value)))
                items[name] = tuple(value)
                headers[name] = header
            else:
                sections.append(Section(name))
                blocks[name] = value
        heights = MeasuredHeights(
            blocks=blocks,
            items=items,
            headers=headers,
            first_page_header=first_page_header,
            continuation_page_header=continuation_page_header,
        )
        return sections, heights

    return factory
