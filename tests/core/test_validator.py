"""
Unit Tests for Record Validation

Tests for the validator module.
"""

import pytest

from photo_report.core.errors import ValidationError
from photo_report.core.schemas.validator import (
    REQUIRED_FIELDS,
    validate_record_data,
    validate_records,
)


class TestValidateRecordData:
    """Tests for validate_record_data function."""

    @pytest.fixture
    def valid_record_data(self) -> dict:
        """Create valid record data for testing."""
        return {
            "id": "r1",
            "report_id": 4,
            "site_name": "Résidence Les Tilleuls",
            "city": "Lyon",
            "building": "B",
            "task": "Peinture",
            "company": "Bouygues",
            "start_date": "2024-04-01",
            "end_date": "2024-04-05",
            "before_image": None,
            "after_image": None,
        }

    def test_valid_data_passes(self, valid_record_data):
        validate_record_data(valid_record_data)
        validate_record_data(valid_record_data, strict=True)

    @pytest.mark.parametrize("field", REQUIRED_FIELDS)
    def test_missing_field_fails(self, valid_record_data, field):
        del valid_record_data[field]
        with pytest.raises(ValidationError, match="Missing required fields") as exc:
            validate_record_data(valid_record_data, path="records[2]")
        assert exc.value.path == "records[2]"
        assert f"Missing field: {field}" in exc.value.errors

    def test_blank_text_fails(self, valid_record_data):
        valid_record_data["company"] = "   "
        with pytest.raises(ValidationError, match="Empty required fields"):
            validate_record_data(valid_record_data)

    @pytest.mark.parametrize("value", [12, 3.5, ["B"], True])
    def test_non_string_text_fails(self, valid_record_data, value):
        valid_record_data["building"] = value
        with pytest.raises(ValidationError, match="must be strings") as exc:
            validate_record_data(valid_record_data, path="records[1]")
        assert exc.value.path == "records[1].building"

    @pytest.mark.parametrize("report_id", [-1, "4", True, 2.5])
    def test_bad_report_id_fails(self, valid_record_data, report_id):
        valid_record_data["report_id"] = report_id
        with pytest.raises(ValidationError) as exc:
            validate_record_data(valid_record_data)
        assert exc.value.path == "report_id"

    def test_bad_date_fails(self, valid_record_data):
        valid_record_data["start_date"] = "01/04/2024"
        with pytest.raises(ValidationError, match="Invalid date"):
            validate_record_data(valid_record_data, path="line 3")

    def test_end_before_start_fails(self, valid_record_data):
        valid_record_data["end_date"] = "2024-03-01"
        with pytest.raises(ValidationError, match="precedes") as exc:
            validate_record_data(valid_record_data)
        assert exc.value.path == "end_date"

    def test_strict_rejects_wrong_image_type(self, valid_record_data):
        valid_record_data["before_image"] = 42
        # Basic checks do not look at images
        validate_record_data(valid_record_data)
        with pytest.raises(ValidationError, match="Schema validation failed") as exc:
            validate_record_data(valid_record_data, strict=True, path="records[0]")
        assert exc.value.path == "records[0].before_image"

    def test_non_dict_fails(self):
        with pytest.raises(ValidationError, match="must be an object"):
            validate_record_data(["not", "a", "record"])


class TestValidateRecords:
    """Tests for validate_records on PhotoRecord instances."""

    def test_complete_metadata_passes(self, record_factory):
        validate_records([record_factory(), record_factory()])

    def test_blank_metadata_lists_every_problem(self, record_factory):
        records = [record_factory(id="a", city=""), record_factory(id="b", task=" ")]
        with pytest.raises(ValidationError) as exc:
            validate_records(records)
        assert exc.value.errors == ["record a: missing city", "record b: missing task"]

    def test_non_text_metadata_fails(self, record_factory):
        with pytest.raises(ValidationError) as exc:
            validate_records([record_factory(id="a", building=12)])
        assert exc.value.errors == ["record a: building is not text (12)"]
