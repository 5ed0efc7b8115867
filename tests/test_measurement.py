"""Tests for ContentMeasurer and compute_layout."""

from __future__ import annotations

import pytest

from resume_builder.constants.layout_constants import SectionName
from resume_builder.models.errors import MeasurementNotReadyError, SurfaceBusyError
from resume_builder.services.layout import compute_layout
from resume_builder.services.measurement import ContentMeasurer
from resume_builder.services.resume_data import ResumeRecord, build_sections, sample_resume
from resume_builder.services.surface import RenderSurface
from resume_builder.templates import get_template
from resume_builder.templates.fragment import measure_block

EXPERIENCE = SectionName.EXPERIENCE


class TestContentMeasurer:
    """Tests for height measurement."""

    def test_measures_every_section_and_entry(
        self, record: ResumeRecord, surface: RenderSurface
    ) -> None:
        heights = ContentMeasurer().measure(record, get_template("professional"), surface)

        for section in build_sections(record):
            if section.is_multi_item:
                assert heights.header_height(section.name) > 0
                for index in range(section.item_count):
                    assert heights.item_height(section.name, index) > 0
            else:
                assert heights.block_height(section.name) > 0
        assert heights.first_page_header > 0
        assert heights.continuation_page_header > 0

    def test_records_layout_context(self, record: ResumeRecord, surface: RenderSurface) -> None:
        heights = ContentMeasurer().measure(record, get_template("modern"), surface)

        assert heights.context == surface.context("modern")
        assert heights.context.content_width == pytest.approx(714)

    def test_unmounted_surface(self, record: ResumeRecord) -> None:
        surface = RenderSurface(mounted=False)
        with pytest.raises(MeasurementNotReadyError):
            ContentMeasurer().measure(record, get_template(None), surface)

    def test_busy_surface(self, record: ResumeRecord, surface: RenderSurface) -> None:
        with surface.claim("export"), pytest.raises(SurfaceBusyError) as excinfo:
            ContentMeasurer().measure(record, get_template(None), surface)

        assert excinfo.value.owner == "export"
        assert excinfo.value.requested_by == "measurement"

    def test_releases_surface(self, record: ResumeRecord, surface: RenderSurface) -> None:
        ContentMeasurer().measure(record, get_template(None), surface)
        assert not surface.is_busy

    def test_section_header_reserve_covers_continuation(
        self, record: ResumeRecord, surface: RenderSurface
    ) -> None:
        template = get_template("professional")
        heights = ContentMeasurer().measure(record, template, surface)
        pdf = surface.new_canvas()

        continued = measure_block(
            pdf, template.section_header(EXPERIENCE, continuation=True), surface.content_width
        )
        assert heights.header_height(EXPERIENCE) >= continued

    def test_narrower_page_is_never_shorter(self, long_record: ResumeRecord) -> None:
        template = get_template("professional")
        wide = ContentMeasurer().measure(long_record, template, RenderSurface(page_width=900))
        narrow = ContentMeasurer().measure(long_record, template, RenderSurface(page_width=500))

        assert narrow.item_height(EXPERIENCE, 0) > wide.item_height(EXPERIENCE, 0)

    def test_variants_measure_differently(self, record: ResumeRecord, surface: RenderSurface) -> None:
        measurer = ContentMeasurer()
        professional = measurer.measure(record, get_template("professional"), surface)
        modern = measurer.measure(record, get_template("modern"), surface)

        assert professional.first_page_header != modern.first_page_header


class TestMeasurementCache:
    """Tests for reuse of the last measurement."""

    def test_same_record_is_measured_once(
        self, record: ResumeRecord, surface: RenderSurface
    ) -> None:
        measurer = ContentMeasurer()
        template = get_template(None)

        first = measurer.measure(record, template, surface)
        second = measurer.measure(record, template, surface)

        assert first is second
        assert measurer.passes == 1

    def test_replaced_record_is_remeasured(self, surface: RenderSurface) -> None:
        measurer = ContentMeasurer()
        template = get_template(None)

        measurer.measure(sample_resume(), template, surface)
        measurer.measure(sample_resume(), template, surface)

        assert measurer.passes == 2

    def test_resize_invalidates(self, record: ResumeRecord, surface: RenderSurface) -> None:
        measurer = ContentMeasurer()
        template = get_template(None)

        measurer.measure(record, template, surface)
        surface.resize(600)
        heights = measurer.measure(record, template, surface)

        assert measurer.passes == 2
        assert heights.context.page_width == 600

    def test_invalidate(self, record: ResumeRecord, surface: RenderSurface) -> None:
        measurer = ContentMeasurer()
        template = get_template(None)

        measurer.measure(record, template, surface)
        measurer.invalidate()
        measurer.measure(record, template, surface)

        assert measurer.passes == 2


class TestComputeLayout:
    """Measure and paginate in one call."""

    def test_sample_resume_fits_one_page(self, record: ResumeRecord, surface: RenderSurface) -> None:
        assignment = compute_layout(record, get_template(None), surface)

        assert assignment.total_pages == 1
        assert not assignment.is_fallback
        assert assignment.context == surface.context("professional")

    @pytest.mark.parametrize("key", ["professional", "modern", "academic"])
    def test_long_resume_spans_pages(self, long_record: ResumeRecord, key: str) -> None:
        surface = RenderSurface()
        assignment = compute_layout(long_record, get_template(key), surface)

        assert assignment.total_pages > 1
        assert assignment.flatten()[EXPERIENCE] == list(range(9))
        for page in assignment:
            assert not page.overflow
            assert page.used_height <= surface.content_height + 1e-6

    def test_narrow_page_needs_more_pages(self, long_record: ResumeRecord) -> None:
        template = get_template(None)
        wide = compute_layout(long_record, template, RenderSurface(page_width=1000))
        narrow = compute_layout(long_record, template, RenderSurface(page_width=500))

        assert narrow.total_pages >= wide.total_pages

    def test_empty_resume(self, surface: RenderSurface) -> None:
        assignment = compute_layout({"personal": {}}, get_template(None), surface)

        assert assignment.total_pages == 1
        assert assignment.page(1).sections == ()
