"""
Tests for input validation module.

Covers the low-level field validators and the catalog validators used by
the admin endpoints.
"""

import pytest
from shining_star.validation import (
    validate_string,
    validate_choice,
    validate_percentage,
    validate_email,
    validate_strict_number,
    validate_service,
    validate_package,
    validate_portfolio_item,
    validate_contact_submission
)


def make_service(**overrides):
    service = {
        'name': {'en': 'Deep Clean'},
        'description': {'en': 'Top to bottom'},
        'price': 100,
        'duration': 60,
        'calculationType': 'fixed',
    }
    service.update(overrides)
    return service


def make_package(**overrides):
    package = {
        'name': {'en': 'Move-out bundle'},
        'description': {'en': 'Everything for moving day'},
        'services': ['a'],
        'price': 250,
        'discount': 10,
        'duration': 240,
    }
    package.update(overrides)
    return package


class TestStrictNumberValidation:
    """Tests for validate_strict_number function"""

    def test_string_rejected(self):
        result = validate_strict_number("100", "price", min_value=0)
        assert result.is_valid is False
        assert result.error == "price must be a number"

    def test_boolean_rejected(self):
        assert validate_strict_number(True, "price").is_valid is False

    def test_integer_required(self):
        result = validate_strict_number(1.5, "duration", integer=True)
        assert result.is_valid is False
        assert result.error == "duration must be an integer"

    def test_integral_float_counts_as_integer(self):
        assert validate_strict_number(60.0, "duration", integer=True).is_valid is True

    def test_exclusive_minimum(self):
        result = validate_strict_number(0, "maxArea", min_value=0, exclusive_min=True)
        assert result.is_valid is False
        assert "greater than 0" in result.error


class TestStringValidation:
    """Tests for validate_string function"""

    def test_valid_string(self):
        """Test string validation with valid input"""
        result = validate_string("Hello", "Name", min_length=2, max_length=10)
        assert result.is_valid is True

    def test_string_too_short(self):
        """Test string validation fails for string below minimum length"""
        result = validate_string("A", "Name", min_length=2)
        assert result.is_valid is False
        assert "at least 2 characters" in result.error

    def test_string_too_long(self):
        """Test string validation fails for string above maximum length"""
        result = validate_string("VeryLongString", "Name", max_length=5)
        assert result.is_valid is False
        assert "at most 5 characters" in result.error

    def test_required_string_missing(self):
        """Test string validation fails for missing required value"""
        result = validate_string("", "Name", required=True)
        assert result.is_valid is False
        assert "is required" in result.error

    def test_whitespace_only_counts_as_missing(self):
        assert validate_string("   ", "Name").is_valid is False

    def test_optional_string_missing(self):
        """Test string validation passes for missing optional value"""
        result = validate_string("", "Name", required=False)
        assert result.is_valid is True


class TestChoiceAndFormatValidation:
    """Tests for validate_choice, validate_percentage and validate_email"""

    def test_valid_choice(self):
        result = validate_choice("area", "calculationType", choices=["quantity", "area"])
        assert result.is_valid is True

    def test_invalid_choice(self):
        result = validate_choice("weight", "calculationType", choices=["quantity", "area"])
        assert result.is_valid is False
        assert "must be one of" in result.error

    def test_validate_percentage_valid(self):
        assert validate_percentage(50.5).is_valid is True

    def test_validate_percentage_too_high(self):
        result = validate_percentage(150)
        assert result.is_valid is False
        assert "at most 100" in result.error

    @pytest.mark.parametrize("email", ["jane@example.com", "a.b+c@mail.co.uk"])
    def test_valid_email(self, email):
        assert validate_email(email).is_valid is True

    @pytest.mark.parametrize("email", ["", "jane", "jane@", "jane@example", "a b@example.com"])
    def test_invalid_email(self, email):
        assert validate_email(email).is_valid is False


class TestServiceValidation:
    """Tests for validate_service"""

    def test_valid_fixed_service(self):
        assert validate_service(make_service()) == []

    def test_quantity_without_unit_yields_single_error(self):
        payload = {
            'name': {'en': 'Deep Clean'},
            'description': {'en': 'x'},
            'price': 100,
            'duration': 60,
            'calculationType': 'quantity',
        }
        assert validate_service(payload) == ["unit is required for quantity type"]

    def test_area_without_unit(self):
        errors = validate_service(make_service(calculationType='area'))
        assert errors == ["unit is required for area type"]

    def test_unknown_calculation_type_is_an_error(self):
        errors = validate_service(make_service(calculationType='weight'))
        assert len(errors) == 1
        assert "calculationType must be one of" in errors[0]

    def test_missing_calculation_type_is_an_error(self):
        payload = make_service()
        del payload['calculationType']
        assert len(validate_service(payload)) == 1

    def test_all_violations_collected(self):
        payload = {
            'name': {'ru': 'Уборка'},
            'description': {},
            'price': -1,
            'duration': 1.5,
            'calculationType': 'quantity',
            'maxQuantity': 0,
            'available': 'yes',
            'category': 7,
        }
        errors = validate_service(payload)
        assert "name.en is required" in errors
        assert "description.en is required" in errors
        assert "price must be at least 0" in errors
        assert "duration must be an integer" in errors
        assert "unit is required for quantity type" in errors
        assert "maxQuantity must be greater than 0" in errors
        assert "available must be a boolean" in errors
        assert "category must be a string" in errors
        assert len(errors) == 8

    def test_area_bounds(self):
        errors = validate_service(make_service(
            calculationType='area', unit='sqft', minArea=-5, maxArea=0
        ))
        assert "minArea must be at least 0" in errors
        assert "maxArea must be greater than 0" in errors

    def test_area_bounds_out_of_order(self):
        errors = validate_service(make_service(
            calculationType='area', unit='sqft', minArea=500, maxArea=100
        ))
        assert errors == ["minArea must not exceed maxArea"]

    def test_valid_area_service(self):
        payload = make_service(calculationType='area', unit='sqft', minArea=100, maxArea=5000)
        assert validate_service(payload) == []

    def test_nan_price_rejected(self):
        errors = validate_service(make_service(price=float('nan')))
        assert errors == ["price must be a finite number"]

    def test_null_optional_fields_allowed(self):
        payload = make_service(category=None, available=None, maxQuantity=None)
        assert validate_service(payload) == []

    def test_non_object_payload(self):
        assert validate_service(['not', 'a', 'dict']) == ["service must be an object"]

    def test_bounds_checked_for_every_calculation_type(self):
        errors = validate_service(make_service(
            calculationType='fixed', maxQuantity=-3, minArea='abc', maxArea=0
        ))
        assert "maxQuantity must be greater than 0" in errors
        assert "minArea must be a number" in errors
        assert "maxArea must be greater than 0" in errors
        assert len(errors) == 3

    def test_valid_bounds_on_fixed_service_accepted(self):
        assert validate_service(make_service(maxQuantity=5, minArea=0, maxArea=10)) == []


class TestPackageValidation:
    """Tests for validate_package"""

    def test_valid_package(self):
        assert validate_package(make_package(), known_service_ids=['a']) == []

    def test_unknown_service_reported(self):
        errors = validate_package(make_package(services=['a', 'missing-id']), known_service_ids=['a'])
        assert errors == ["unknown service ids: missing-id"]

    def test_all_unknown_services_reported_together(self):
        errors = validate_package(
            make_package(services=['x', 'a', 'y', 'x']), known_service_ids=['a']
        )
        assert errors == ["unknown service ids: x, y"]

    def test_non_string_service_ids_reported(self):
        errors = validate_package(
            make_package(services=[['a'], {'id': 'a'}, 7, 'a']), known_service_ids=['a']
        )
        assert errors == ["services must contain only service ids"]

    def test_non_string_and_unknown_ids_both_reported(self):
        errors = validate_package(make_package(services=[['a'], 'ghost']), known_service_ids=['a'])
        assert errors == ["services must contain only service ids", "unknown service ids: ghost"]

    def test_services_must_be_list(self):
        errors = validate_package(make_package(services='a'), known_service_ids=['a'])
        assert errors == ["services must be a list"]

    def test_discount_range(self):
        errors = validate_package(make_package(discount=120), known_service_ids=['a'])
        assert errors == ["discount must be at most 100"]

    def test_numeric_fields_and_booleans(self):
        errors = validate_package(
            make_package(price=-5, duration=-1, available='false'),
            known_service_ids=['a']
        )
        assert "price must be at least 0" in errors
        assert "duration must be at least 0" in errors
        assert "available must be a boolean" in errors


class TestOtherValidators:
    """Portfolio entries and contact submissions"""

    def test_portfolio_item_requires_title(self):
        errors = validate_portfolio_item({'title': {'en': ''}, 'description': {'en': 'Kitchen'}})
        assert errors == ["title.en is required"]

    def test_contact_submission(self):
        assert validate_contact_submission({'name': 'Jane', 'email': 'jane@example.com'}) == []

    def test_contact_submission_errors(self):
        errors = validate_contact_submission({'name': '', 'email': 'nope'})
        assert "name is required" in errors
        assert "email format is invalid" in errors
