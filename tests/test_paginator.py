"""Tests for the greedy page breaker."""

from __future__ import annotations

import math

import pytest

from resume_builder.constants.layout_constants import SectionName
from resume_builder.models.pagination import LayoutContext, MeasuredHeights, Section
from resume_builder.services.paginator import fallback_assignment, paginate

EXPERIENCE = SectionName.EXPERIENCE
EDUCATION = SectionName.EDUCATION


def _names(page) -> list[str]:
    return [str(section_slice.name) for section_slice in page.sections]


def _scenario(make_heights, experience: list[float]):
    return make_heights(
        contact=50,
        profile=40,
        experience=experience,
        education=[60],
        skills=30,
        languages=20,
    )


class TestScenarios:
    """End-to-end placement of a typical resume."""

    def test_everything_fits_on_one_page(self, make_heights) -> None:
        sections, heights = _scenario(make_heights, [80])
        assignment = paginate(sections, heights, 300, 0, 0)

        assert assignment.total_pages == 1
        assert not assignment.is_fallback
        assert _names(assignment.page(1)) == [
            "contact",
            "profile",
            "experience",
            "education",
            "skills",
            "languages",
        ]
        assert assignment.page(1).used_height == pytest.approx(280)

    def test_long_experience_splits_with_continuation(self, make_heights) -> None:
        sections, heights = _scenario(make_heights, [80] * 5)
        assignment = paginate(sections, heights, 250, 0, 0)

        assert assignment.total_pages == 3
        first, second, third = assignment.pages
        assert first.section(EXPERIENCE).items == (0, 1)
        assert not first.section(EXPERIENCE).is_continuation
        assert second.section(EXPERIENCE).items == (2, 3, 4)
        assert second.section(EXPERIENCE).is_continuation
        assert _names(second) == ["experience"]
        assert _names(third) == ["education", "skills", "languages"]
        assert not third.section(EDUCATION).is_continuation

    def test_exact_fit_stays_on_current_page(self, make_heights) -> None:
        sections, heights = make_heights(profile=100, skills=150)
        assignment = paginate(sections, heights, 250, 0, 0)

        assert assignment.total_pages == 1
        assert assignment.page(1).used_height == pytest.approx(250)

    def test_just_over_capacity_breaks(self, make_heights) -> None:
        sections, heights = make_heights(profile=100, skills=150.5)
        assignment = paginate(sections, heights, 250, 0, 0)

        assert assignment.total_pages == 2
        assert _names(assignment.page(2)) == ["skills"]


class TestHeaders:
    """Page header reserves and section header placement."""

    def test_reserves_reduce_capacity(self, make_heights) -> None:
        sections, heights = make_heights(experience=[100, 100, 100], header=0)
        assignment = paginate(sections, heights, 250, 50, 100)

        assert [page.section(EXPERIENCE).items for page in assignment] == [(0, 1), (2,)]
        assert assignment.page(1).used_height == pytest.approx(250)
        assert assignment.page(2).used_height == pytest.approx(200)

    def test_section_header_not_orphaned(self, make_heights) -> None:
        sections, heights = make_heights(profile=200, experience=[40, 40], header=20)
        assignment = paginate(sections, heights, 250, 0, 0)

        # 200 + 20 + 40 would exceed 250: header moves with its first entry.
        assert _names(assignment.page(1)) == ["profile"]
        experience = assignment.page(2).section(EXPERIENCE)
        assert experience.items == (0, 1)
        assert not experience.is_continuation

    def test_header_counted_once_per_page(self, make_heights) -> None:
        sections, heights = make_heights(experience=[100, 100, 100], header=25)
        assignment = paginate(sections, heights, 250, 0, 0)

        assert assignment.page(1).used_height == pytest.approx(225)
        assert assignment.page(2).used_height == pytest.approx(125)
        assert assignment.page(2).section(EXPERIENCE).is_continuation

    def test_continuation_on_every_later_page(self, make_heights) -> None:
        sections, heights = make_heights(contact=50, experience=[120] * 7, header=10)
        assignment = paginate(sections, heights, 250, 30, 30)

        pages_with_experience = [page for page in assignment if page.section(EXPERIENCE)]
        assert len(pages_with_experience) > 2
        assert not pages_with_experience[0].section(EXPERIENCE).is_continuation
        for page in pages_with_experience[1:]:
            assert page.section(EXPERIENCE).is_continuation


class TestOversizedUnits:
    """Atomic units taller than a page."""

    def test_oversized_block_isolated_on_own_page(self, make_heights) -> None:
        sections, heights = make_heights(contact=50, profile=400, skills=30)
        assignment = paginate(sections, heights, 250, 0, 0)

        assert [_names(page) for page in assignment] == [["contact"], ["profile"], ["skills"]]
        assert assignment.page(2).overflow
        assert not assignment.page(1).overflow
        assert not assignment.page(3).overflow

    def test_oversized_first_unit_stays_on_first_page(self, make_heights) -> None:
        sections, heights = make_heights(profile=400, skills=30)
        assignment = paginate(sections, heights, 250, 0, 0)

        assert assignment.total_pages == 2
        assert assignment.page(1).overflow
        assert _names(assignment.page(1)) == ["profile"]

    def test_oversized_entry_keeps_section_order(self, make_heights) -> None:
        sections, heights = make_heights(experience=[100, 500, 100])
        assignment = paginate(sections, heights, 250, 0, 0)

        assert assignment.flatten()[EXPERIENCE] == [0, 1, 2]
        assert assignment.page(2).overflow

    def test_overflow_is_logged(self, make_heights, caplog: pytest.LogCaptureFixture) -> None:
        sections, heights = make_heights(profile=400)
        paginate(sections, heights, 250, 0, 0)

        assert "overflows" in caplog.text


class TestFallback:
    """Incomplete measurements never crash the paginator."""

    def test_no_measurement(self) -> None:
        sections = [Section(SectionName.PROFILE), Section(EXPERIENCE, 3)]
        assignment = paginate(sections, None, 250, 0, 0)

        assert assignment.is_fallback
        assert assignment.total_pages == 1
        assert assignment.flatten() == {SectionName.PROFILE: [0], EXPERIENCE: [0, 1, 2]}

    def test_missing_item_height(self, make_heights) -> None:
        sections, heights = make_heights(experience=[80, 80])
        sections = [Section(EXPERIENCE, 3)]
        assignment = paginate(sections, heights, 250, 0, 0)

        assert assignment.is_fallback
        assert assignment.flatten()[EXPERIENCE] == [0, 1, 2]

    def test_missing_section_header(self) -> None:
        heights = MeasuredHeights(items={EXPERIENCE: (80.0,)})
        assignment = paginate([Section(EXPERIENCE, 1)], heights, 250, 0, 0)

        assert assignment.is_fallback

    @pytest.mark.parametrize("bad", [math.nan, math.inf, -1.0])
    def test_invalid_height(self, make_heights, bad: float) -> None:
        sections, heights = make_heights(profile=bad, skills=30)
        assignment = paginate(sections, heights, 250, 0, 0)

        assert assignment.is_fallback

    @pytest.mark.parametrize("capacity", [0.0, -10.0, math.nan])
    def test_invalid_capacity(self, make_heights, capacity: float) -> None:
        sections, heights = make_heights(profile=40)
        assignment = paginate(sections, heights, capacity, 0, 0)

        assert assignment.is_fallback

    def test_fallback_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        paginate([Section(SectionName.PROFILE)], None, 250, 0, 0)

        assert "Pagination fallback" in caplog.text

    def test_fallback_keeps_context(self) -> None:
        context = LayoutContext(794, 1123, 40, "modern")
        assignment = fallback_assignment([Section(SectionName.SKILLS)], context=context)

        assert assignment.context == context
        assert assignment.is_fallback


class TestInvariants:
    """Properties that hold for any input."""

    @pytest.mark.parametrize("capacity", [120, 200, 250, 333, 1000])
    def test_items_keep_document_order(self, make_heights, capacity: float) -> None:
        sections, heights = make_heights(
            contact=55,
            profile=90,
            experience=[70, 130, 45, 200, 95, 60],
            education=[110, 40, 75],
            skills=35,
            languages=25,
            header=18,
        )
        assignment = paginate(sections, heights, capacity, 60, 30)

        flattened = assignment.flatten()
        assert list(flattened) == [section.name for section in sections]
        assert flattened[EXPERIENCE] == list(range(6))
        assert flattened[EDUCATION] == list(range(3))

    @pytest.mark.parametrize("capacity", [250, 400, 600])
    def test_pages_within_capacity(self, make_heights, capacity: float) -> None:
        sections, heights = make_heights(
            contact=50,
            profile=140,
            experience=[90, 130, 45, 140],
            education=[60, 60],
            skills=30,
            header=15,
        )
        assignment = paginate(sections, heights, capacity, 20, 20)

        for page in assignment:
            assert page.used_height <= capacity + 1e-6
            assert not page.overflow

    def test_idempotent(self, make_heights) -> None:
        sections, heights = _scenario(make_heights, [80, 120, 90, 60])
        context = LayoutContext(794, 1123, 40, "professional")

        first = paginate(sections, heights, 250, 40, 20, context=context)
        second = paginate(sections, heights, 250, 40, 20, context=context)

        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_section_order_restored_when_given_out_of_order(self, make_heights) -> None:
        sections, heights = make_heights(skills=30, contact=50, profile=40)
        assignment = paginate(list(reversed(sections)), heights, 250, 0, 0)

        assert _names(assignment.page(1)) == ["contact", "profile", "skills"]

    def test_empty_sections_contribute_nothing(self, make_heights) -> None:
        _, heights = make_heights(profile=40)
        sections = [Section(SectionName.PROFILE), Section(EXPERIENCE, 0)]
        assignment = paginate(sections, heights, 250, 0, 0)

        assert not assignment.is_fallback
        assert _names(assignment.page(1)) == ["profile"]

    def test_no_sections_gives_one_empty_page(self) -> None:
        assignment = paginate([], MeasuredHeights(), 250, 40, 20)

        assert assignment.total_pages == 1
        assert assignment.page(1).sections == ()
