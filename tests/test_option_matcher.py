"""
Tests for the Option Similarity Matcher
=======================================

Coverage:
- Exact and whitespace-insensitive equality
- Material / grade groups with numeric grade agreement
- Measurement parsing and unit conversion (tolerance 0.5mm)
- Shape / finish / weave groups
- Degenerate input

Usage:
    pytest tests/test_option_matcher.py -v
"""

import pytest
from src.reconciliation.option_matcher import (
    are_options_similar, are_options_strongly_similar, are_options_exactly_equal,
    parse_measurement_mm, option_key,
)


class TestExactRules:

    def test_case_insensitive(self):
        assert are_options_similar("SS304", "ss304")
        assert are_options_similar("  Red ", "red")

    def test_whitespace_insensitive(self):
        assert are_options_similar("SS304", "SS 304")
        assert are_options_exactly_equal("10 mm", "10mm")

    def test_option_key(self):
        assert option_key(" SS  304 ") == "ss304"
        assert option_key("") == ""

    def test_strong_check_excludes_plain_equality(self):
        assert not are_options_strongly_similar("abc", "ABC")


class TestMaterialGroups:

    def test_grade_synonyms(self):
        assert are_options_similar("304", "Stainless Steel 304")
        assert are_options_similar("SS 316", "stainless steel 316")

    def test_different_grades_rejected(self):
        assert not are_options_similar("SS 304", "SS 316")
        assert not are_options_similar("Aluminium 6061", "Aluminum 6063")

    def test_material_names(self):
        assert are_options_similar("MS", "Mild Steel")
        assert are_options_similar("Carbon Steel", "MS")
        assert are_options_similar("GI", "Galvanized Iron")
        assert are_options_similar("Aluminium", "Aluminum")

    def test_different_materials(self):
        assert not are_options_similar("MS", "GI")
        assert not are_options_similar("Aluminium", "SS 304")

    def test_ss_prefix_glued_to_grade(self):
        """'SS304' and 'SS 304' read the same against a generic material."""
        assert are_options_similar("SS 304", "Stainless Steel")
        assert are_options_similar("SS304", "Stainless Steel")
        assert are_options_similar("SS304", "304")

    def test_glued_grades_still_compared(self):
        assert not are_options_similar("SS304", "SS316")
        assert not are_options_similar("SS304", "Stainless Steel 316")
        assert not are_options_similar("AL6061", "Aluminium 6063")

    def test_terms_match_whole_words_only(self):
        """'ms' must not fire inside 'items'."""
        assert not are_options_similar("Items", "MS")


class TestMeasurements:

    @pytest.mark.parametrize("option, expected", [
        ("1219 mm", 1219.0),
        ("4 ft", 1219.2),
        ("2.5 cm", 25.0),
        ("1 m", 1000.0),
        ('2"', 50.8),
        ("2 inch", 50.8),
        ("3 inches", 76.2),
        ("10", 10.0),
        ("5 mild steel", 5.0),
    ])
    def test_parse_measurement(self, option, expected):
        assert parse_measurement_mm(option) == pytest.approx(expected)

    def test_parse_measurement_none(self):
        assert parse_measurement_mm("Round") is None
        assert parse_measurement_mm("") is None

    def test_four_feet_equals_1219_mm(self):
        """0.2mm apart: equal under the 0.5mm tolerance."""
        assert are_options_similar("1219 mm", "4 ft")

    def test_tighter_tolerance_rejects(self):
        assert not are_options_similar("1219 mm", "4 ft", tolerance_mm=0.01)

    def test_unit_conversion(self):
        assert are_options_similar("1 m", "100 cm")
        assert are_options_similar("2 inch", '2"')
        assert are_options_similar("10 mm", "1 cm")

    def test_different_sizes(self):
        assert not are_options_similar("10 mm", "12 mm")
        assert not are_options_similar("1219 mm", "1220 mm")


class TestShapeFinishGroups:

    def test_shapes(self):
        assert are_options_similar("Round", "Circular")
        assert are_options_similar("Hexagon", "Hexagonal")
        assert not are_options_similar("Square", "Rectangular")

    def test_finishes(self):
        assert are_options_similar("Mill Finish", "Mill")
        assert are_options_similar("Anodized", "anodised")
        assert not are_options_similar("Polished", "Brushed")

    def test_weaves(self):
        assert are_options_similar("Twill", "Twill Weave")
        assert are_options_similar("Plain Weave", "plain woven")


class TestDegenerateInput:

    def test_empty_options_never_match(self):
        assert not are_options_similar("", "Red")
        assert not are_options_similar("Red", "")
        assert not are_options_similar("", "")
        assert not are_options_similar("   ", "   ")
        assert not are_options_similar(None, "Red")

    @pytest.mark.parametrize("a, b", [
        ("SS304", "SS 304"), ("MS", "GI"), ("1219 mm", "4 ft"),
        ("Round", "Circular"), ("SS 304", "SS 316"), ("Red", "Blue"),
    ])
    def test_symmetric(self, a, b):
        assert are_options_similar(a, b) == are_options_similar(b, a)
