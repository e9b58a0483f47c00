"""
Unit tests for field formatters.

Includes property-based testing with hypothesis.
"""

import string

import pytest
from hypothesis import given
from hypothesis import strategies as st

from contact_pipeline.core.formatters import (
    CATEGORY_MAP,
    format_address,
    format_name,
    format_phone,
    standardize_category,
)


class TestFormatName:
    """Tests for format_name"""

    def test_trims_and_title_cases(self):
        assert format_name(" john smith ") == "John Smith"

    def test_lowercases_rest_of_each_part(self):
        assert format_name("mcDONALD o'NEIL") == "Mcdonald O'neil"

    def test_keeps_internal_double_spaces(self):
        """Split/join on single spaces leaves empty parts in place"""
        assert format_name("ann  lee") == "Ann  Lee"

    @given(st.text(alphabet=string.ascii_letters + " ", min_size=1))
    def test_property_idempotent_on_ascii(self, name):
        """Property test: formatting twice equals formatting once"""
        assert format_name(format_name(name)) == format_name(name)


class TestFormatPhone:
    """Tests for format_phone"""

    @pytest.mark.parametrize("raw", ["555-123-4567", "(555) 123 4567", "555.123.4567", "5551234567"])
    def test_formats_ten_digit_numbers(self, raw):
        assert format_phone(raw) == "(555) 123-4567"

    @pytest.mark.parametrize("raw", ["123-4567", "1-555-123-4567", "+44 20 7946 0958", "ext"])
    def test_other_lengths_unchanged(self, raw):
        assert format_phone(raw) == raw

    def test_empty_and_missing(self):
        assert format_phone("") == ""
        assert format_phone(None) == ""

    @given(st.text(alphabet=string.digits, min_size=10, max_size=10))
    def test_property_ten_digits_idempotent(self, digits):
        """Property test: reformatting an already formatted number is a no-op"""
        formatted = format_phone(digits)
        assert formatted == f"({digits[:3]}) {digits[3:6]}-{digits[6:]}"
        assert format_phone(formatted) == formatted

    @given(st.text(alphabet=string.digits, min_size=1, max_size=15).filter(lambda s: len(s) != 10))
    def test_property_non_ten_digit_unchanged(self, digits):
        assert format_phone(digits) == digits


class TestFormatAddress:
    """Tests for format_address"""

    def test_joins_all_parts_in_order(self):
        record = {"street_address": "1 Main", "city": "Springfield", "state": "IL", "zip_code": "62704"}
        assert format_address(record) == "1 Main, Springfield, IL, 62704"

    def test_drops_empty_and_missing_parts(self):
        record = {"street_address": "", "city": "Springfield", "zip_code": "62704"}
        assert format_address(record) == "Springfield, 62704"

    def test_all_empty(self):
        assert format_address({}) == ""


class TestStandardizeCategory:
    """Tests for standardize_category"""

    @pytest.mark.parametrize("raw,expected", [
        ("cat a", "Category A"),
        ("CAT A", "Category A"),
        ("Cat B", "Category B"),
        ("cAt c", "Category C"),
    ])
    def test_maps_synonyms_case_insensitively(self, raw, expected):
        assert standardize_category(raw) == expected

    def test_unknown_passes_through_with_original_case(self):
        assert standardize_category("unknown") == "unknown"
        assert standardize_category("VIP") == "VIP"

    def test_missing_category(self):
        assert standardize_category(None) == ""

    @given(st.text().filter(lambda s: s.lower() not in CATEGORY_MAP))
    def test_property_unmapped_values_unchanged(self, category):
        assert standardize_category(category) == category
