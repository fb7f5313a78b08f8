"""
Unit tests for record grouping.
"""

from datetime import date

import pytest

from photo_report.builder.grouping import available_report_ids, group_records, next_report_id
from photo_report.core.errors import ValidationError
from photo_report.core.models import SectionKey


class TestGroupRecords:
    def test_sections_follow_first_seen_order(self, record_factory):
        records = [
            record_factory(task="Peinture"),
            record_factory(task="Carrelage"),
            record_factory(task="Peinture"),
            record_factory(task="Altimétrie"),
        ]

        sections = group_records(records, 4)

        # Not sorted alphabetically
        assert [s.key.task for s in sections] == ["Peinture", "Carrelage", "Altimétrie"]
        assert [r.id for r in sections[0].records] == [records[0].id, records[2].id]

    def test_flattening_preserves_every_record_once(self, record_factory):
        records = [
            record_factory(city="Lyon" if i % 2 else "Nantes", task=f"T{i % 3}", report_id=4 if i % 5 else 9)
            for i in range(20)
        ]

        sections = group_records(records, 4)

        flattened = [r for s in sections for r in s.records]
        expected = [r for r in records if r.report_id == 4]
        assert sorted(r.id for r in flattened) == sorted(r.id for r in expected)
        assert len(flattened) == len(set(r.id for r in flattened))
        # Within a section, fetch order is kept
        for section in sections:
            positions = [records.index(r) for r in section.records]
            assert positions == sorted(positions)

    def test_only_requested_report_is_kept(self, record_factory):
        records = [record_factory(report_id=3), record_factory(report_id=4)]

        sections = group_records(records, 4)

        assert len(sections) == 1
        assert all(s.report_id == 4 for s in sections)

    def test_end_date_distinguishes_sections(self, record_factory):
        records = [record_factory(end_date=None), record_factory(end_date=date(2024, 4, 5))]

        sections = group_records(records, 4)

        assert len(sections) == 2
        assert sections[0].key.end_date is None

    def test_key_is_structural_not_joined_string(self, record_factory):
        # "A|B" + "C" and "A" + "B|C" collide under a "|"-joined key
        first = record_factory(city="A|B", building="C")
        second = record_factory(city="A", building="B|C")

        sections = group_records([first, second], 4)

        assert len(sections) == 2
        assert isinstance(sections[0].key, SectionKey)
        assert sections[0].key.as_tuple()[:2] == ("A|B", "C")

    def test_site_name_comes_from_first_record(self, record_factory):
        records = [record_factory(site_name="Chantier Nord"), record_factory(site_name="Autre")]

        assert group_records(records, 4)[0].site_name == "Chantier Nord"

    def test_when_no_records_then_raises(self):
        with pytest.raises(ValidationError, match="No photo records found for report 4"):
            group_records([], 4)

    def test_when_report_absent_then_raises(self, record_factory):
        with pytest.raises(ValidationError):
            group_records([record_factory(report_id=3)], 4)


class TestReportNumbers:
    def test_available_report_ids_sorted_unique(self, record_factory):
        records = [record_factory(report_id=n) for n in (7, 3, 7, 4)]
        assert available_report_ids(records) == [3, 4, 7]

    def test_next_report_id(self, record_factory):
        assert next_report_id([record_factory(report_id=n) for n in (2, 9)]) == 10
        assert next_report_id([]) == 1
