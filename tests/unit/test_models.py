# =============================================================================
# tests/unit/test_models.py
# Unit Tests for record helpers, payload validation and selectors
# =============================================================================

import pytest

from livestock_core.errors import DataValidationError
from livestock_core.models import (
    collect_field_errors,
    filter_animals,
    filter_events,
    filter_owners,
    is_low_stock,
    owner_full_name,
    to_number,
    validate_payload,
)


@pytest.fixture
def valid_animal():
    return {
        "tag_id": "C-010",
        "species": "cattle",
        "breed": "Angus",
        "gender": "female",
        "date_of_birth": "2022-04-01",
        "weight": "410.5",
        "owner": 1,
        "acquisition_date": "2022-05-01",
        "acquisition_price": 1200,
        "health_status": "healthy",
    }


class TestRecordHelpers:
    """Test field parsing helpers"""

    @pytest.mark.parametrize("value,expected", [("2.5", 2.5), (3, 3.0), (None, None), ("x", None), (True, None)])
    def test_to_number(self, value, expected):
        assert to_number(value) == expected

    def test_low_stock_without_numbers(self):
        assert is_low_stock({"name": "Hay"}) is False

    def test_owner_full_name_fallback(self):
        assert owner_full_name({"first_name": "Ben", "last_name": "Okoro"}) == "Ben Okoro"
        assert owner_full_name({"first_name": "Ben"}) == "Ben"


class TestPayloadValidation:
    """Test per-resource field rules"""

    def test_valid_animal(self, valid_animal):
        assert validate_payload("animals", valid_animal) is valid_animal

    def test_missing_required_fields(self):
        errors = collect_field_errors("owners", {"first_name": "Ana"})

        assert errors["last_name"] == "Last name is required"
        assert errors["zip_code"] == "Zip code is required"
        assert "first_name" not in errors

    def test_non_positive_weight(self, valid_animal):
        valid_animal["weight"] = 0

        assert collect_field_errors("animals", valid_animal) == {"weight": "Weight must be a positive number"}

    def test_negative_quantity(self):
        payload = {"name": "Hay", "category": "feed", "quantity": -1, "unit": "bag",
                   "reorder_level": 2, "unit_price": 3}

        assert collect_field_errors("inventory", payload) == {
            "quantity": "Quantity must be greater than or equal to 0"
        }

    def test_invalid_email_and_choice(self):
        errors = collect_field_errors("owners", {"email": "not-an-email"}, partial=True)

        assert errors == {"email": "Invalid email"}

    def test_unknown_choice(self, valid_animal):
        valid_animal["species"] = "dragon"

        assert "species" in collect_field_errors("animals", valid_animal)

    def test_bad_date(self):
        errors = collect_field_errors("events", {"date": "31/31/2024"}, partial=True)

        assert errors == {"date": "Date must be a valid date"}

    def test_partial_only_checks_present_fields(self):
        assert collect_field_errors("animals", {"weight": 12}, partial=True) == {}

    def test_validate_payload_raises_with_field_errors(self):
        with pytest.raises(DataValidationError) as exc_info:
            validate_payload("events", {"event_type": "birth"})

        assert exc_info.value.code == "DATA_001"
        assert "title" in exc_info.value.field_errors

    def test_unknown_resource(self):
        with pytest.raises(ValueError):
            collect_field_errors("reports", {})


class TestSelectors:
    """Test list screen search and filters"""

    def test_animal_search_is_case_insensitive(self, sample_animals):
        assert [a["id"] for a in filter_animals(sample_animals, search="angus")] == [1]
        assert [a["id"] for a in filter_animals(sample_animals, search="c-00")] == [1, 2]

    def test_animal_species_and_status(self, sample_animals):
        assert [a["id"] for a in filter_animals(sample_animals, species="cattle", status="sick")] == [2]
        assert [a["id"] for a in filter_animals(sample_animals, status="healthy")] == [1, 4]

    def test_owner_search(self, sample_owners):
        assert [o["id"] for o in filter_owners(sample_owners, "ranch")] == [2]
        assert [o["id"] for o in filter_owners(sample_owners, "0101")] == [1]
        assert len(filter_owners(sample_owners, "")) == 2

    def test_event_type_filter(self, sample_events):
        assert [e["id"] for e in filter_events(sample_events, "vaccination")] == [16, 12]
        assert len(filter_events(sample_events)) == 6
