"""
Unit tests for the pagination planner.

Covers the page-break rules (header room and per-page capacity),
placeholder units and determinism of the plan.
"""

import pytest

from photo_report.builder.grouping import group_records
from photo_report.builder.layout import (
    LayoutConfig,
    PageCapacities,
    PlacementKind,
    plan_layout,
)

CAPACITIES = PageCapacities(first_page=3, other_pages=4)
HEADER_HEIGHT = 57.0


@pytest.fixture
def sections_factory(record_factory):
    """
    Build sections from a list of pair counts.

    ``[3, 2]`` gives two sections holding 3 and 2 complete records.
    """
    def _create(pair_counts, report_id=4):
        records = []
        for index, count in enumerate(pair_counts):
            records.extend(
                record_factory(report_id=report_id, task=f"Task {index}") for _ in range(count)
            )
        return group_records(records, report_id)
    return _create


def _kinds(plan, page):
    return [p.kind for p in plan.on_page(page)]


class TestPaginatorScenarios:
    """Scenarios with the default A4 geometry."""

    def test_when_one_section_with_two_pairs_then_single_page(self, sections_factory):
        # Arrange
        sections = sections_factory([2])

        # Act
        plan = plan_layout(sections, CAPACITIES, HEADER_HEIGHT)

        # Assert
        assert plan.page_count == 1
        assert _kinds(plan, 1) == [
            PlacementKind.TITLE,
            PlacementKind.INFO_BLOCK,
            PlacementKind.PHOTO_PAIR,
            PlacementKind.PHOTO_PAIR,
        ]

    def test_when_five_pairs_then_three_on_first_page_and_two_on_second(self, sections_factory):
        sections = sections_factory([5])

        plan = plan_layout(sections, CAPACITIES, HEADER_HEIGHT)

        assert plan.page_count == 2
        assert plan.units_on_page(1) == 3
        assert plan.units_on_page(2) == 2
        # No repeated info block on the continuation page
        assert _kinds(plan, 2) == [PlacementKind.PHOTO_PAIR, PlacementKind.PHOTO_PAIR]
        assert [p.offset for p in plan.on_page(2)] == [30.0, 95.0]

    def test_when_first_section_fills_capacity_then_second_starts_new_page(self, sections_factory):
        sections = sections_factory([3, 2])

        plan = plan_layout(sections, CAPACITIES, HEADER_HEIGHT)

        assert plan.page_count == 2
        assert _kinds(plan, 1) == [PlacementKind.TITLE, PlacementKind.INFO_BLOCK] + [PlacementKind.PHOTO_PAIR] * 3
        assert _kinds(plan, 2) == [PlacementKind.INFO_BLOCK] + [PlacementKind.PHOTO_PAIR] * 2
        info = plan.on_page(2)[0]
        assert info.section_index == 1
        assert info.payload is sections[1]
        # Continuation top 30 plus the 10mm section gap
        assert info.offset == 40.0

    def test_when_logo_then_reserved_above_title(self, sections_factory):
        sections = sections_factory([3])

        plan = plan_layout(sections, CAPACITIES, HEADER_HEIGHT, has_logo=True, title="Rapport")

        logo, title, info, *pairs = plan.on_page(1)
        assert logo.kind is PlacementKind.LOGO and logo.offset == 10.0
        assert title.kind is PlacementKind.TITLE and title.offset == 50.0
        assert title.payload == "Rapport"
        assert info.offset == 65.0
        assert [p.offset for p in pairs] == [105.0, 170.0, 235.0]
        assert plan.has_logo is True

    def test_when_record_lacks_image_then_placeholder_unit(self, record_factory, jpeg_bytes):
        record = record_factory(images=False, before_image=jpeg_bytes)
        sections = group_records([record], 4)

        plan = plan_layout(sections, CAPACITIES, HEADER_HEIGHT)

        units = [p for p in plan.placements if p.counts_toward_capacity]
        assert len(units) == 1
        assert units[0].kind is PlacementKind.PLACEHOLDER
        assert units[0].payload is record
        assert units[0].height == LayoutConfig().placeholder_block_height
        assert any(record.id in w for w in plan.warnings)


class TestPaginatorRules:
    """Page-break rules and plan-level properties."""

    @pytest.mark.parametrize("pair_counts", [
        [1], [4], [7], [12], [3, 3, 3], [1, 1, 1, 1, 1, 1], [5, 2], [2, 9, 1, 4],
    ])
    def test_capacity_never_exceeded(self, sections_factory, pair_counts):
        plan = plan_layout(sections_factory(pair_counts), CAPACITIES, HEADER_HEIGHT)

        assert plan.units_on_page(1) <= CAPACITIES.first_page
        for page in range(2, plan.page_count + 1):
            assert plan.units_on_page(page) <= CAPACITIES.other_pages
        assert plan.unit_count == sum(pair_counts)
        assert plan.section_count == len(pair_counts)

    def test_placeholders_count_toward_capacity(self, record_factory):
        records = [record_factory(images=False) for _ in range(5)]
        sections = group_records(records, 4)

        plan = plan_layout(sections, CAPACITIES, HEADER_HEIGHT)

        assert plan.units_on_page(1) == 3
        assert plan.units_on_page(2) == 2

    def test_second_page_capacity_applies_after_break(self, sections_factory):
        capacities = PageCapacities(first_page=1, other_pages=2)

        plan = plan_layout(sections_factory([5]), capacities, HEADER_HEIGHT)

        assert [plan.units_on_page(p) for p in range(1, plan.page_count + 1)] == [1, 2, 2]

    def test_when_header_room_short_then_section_moves_to_next_page(self, sections_factory):
        # Two pairs leave the cursor at 195mm; a 120mm header needs more room
        plan = plan_layout(sections_factory([2, 1]), CAPACITIES, 120.0)

        info_blocks = [p for p in plan.placements if p.kind is PlacementKind.INFO_BLOCK]
        assert [p.page_number for p in info_blocks] == [1, 2]

    def test_when_first_unit_would_cross_footer_then_info_block_moves_with_it(self, sections_factory):
        # Two pairs leave the cursor at 195mm; gap, info block and pair would end at 295mm
        sections = sections_factory([2, 1])

        plan = plan_layout(sections, CAPACITIES, HEADER_HEIGHT)

        info = [p for p in plan.placements if p.kind is PlacementKind.INFO_BLOCK][1]
        unit = next(p for p in plan.placements if p.section_index == 1 and p.counts_toward_capacity)
        assert info.page_number == unit.page_number == 2
        assert (info.offset, unit.offset) == (40.0, 80.0)

    def test_when_placeholder_fits_below_info_block_then_section_stays(self, record_factory):
        records = [record_factory(task="A") for _ in range(2)] + [record_factory(task="B", images=False)]

        plan = plan_layout(group_records(records, 4), CAPACITIES, HEADER_HEIGHT)

        info = [p for p in plan.placements if p.kind is PlacementKind.INFO_BLOCK][1]
        assert (info.page_number, info.offset) == (1, 205.0)
        assert plan.page_count == 1

    def test_units_never_cross_footer(self, sections_factory):
        layout = LayoutConfig()
        plan = plan_layout(sections_factory([2, 6, 1, 3]), CAPACITIES, HEADER_HEIGHT, has_logo=True)

        for placement in plan.placements:
            if placement.kind is PlacementKind.PHOTO_PAIR:
                assert placement.offset + layout.image_height <= layout.content_bottom

    def test_plan_is_deterministic(self, sections_factory):
        sections = sections_factory([3, 2, 5])

        first = plan_layout(sections, CAPACITIES, HEADER_HEIGHT, has_logo=True, title="T")
        second = plan_layout(sections, CAPACITIES, HEADER_HEIGHT, has_logo=True, title="T")

        assert first == second

    def test_page_count_matches_highest_page(self, sections_factory):
        plan = plan_layout(sections_factory([4, 4, 4]), CAPACITIES, HEADER_HEIGHT)

        assert plan.page_count == max(p.page_number for p in plan.placements)

    def test_no_sections_gives_title_only_page(self):
        plan = plan_layout([], CAPACITIES, HEADER_HEIGHT, title="Empty")

        assert plan.page_count == 1
        assert _kinds(plan, 1) == [PlacementKind.TITLE]

    def test_when_header_height_not_positive_then_raises(self, sections_factory):
        with pytest.raises(ValueError, match="header_height"):
            plan_layout(sections_factory([1]), CAPACITIES, 0)
