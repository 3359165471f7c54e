"""
Option Similarity Matcher (Deterministic)
=========================================

Decides whether two option values ("SS 304", "1219 mm", "Round") denote
the same underlying choice.

Rules (first one that fires wins):
    1. Case-insensitive trimmed equality
    2. Equality after removing all whitespace
    3. Material / grade synonym groups, with numeric grade agreement
    4. Measurement equivalence after conversion to millimetres
    5. Shape / finish / weave synonym groups

Rules 3-5 form the "strong" semantic check used by the option reconciler
once exact matches have been taken.
"""

import re
from functools import lru_cache
from typing import Optional, Sequence, Tuple

from .synonym_tables import (
    DEFAULT_THRESHOLDS,
    MATERIAL_GROUPS,
    SHAPE_FINISH_GROUPS,
    UNIT_TO_MM,
)

_WHITESPACE = re.compile(r"\s+")
_GRADE_NUMBER = re.compile(r"(?<![0-9.])(\d+)")

# Longest unit spellings first so "mm" is not read as "m", "inch" not as "in".
_UNIT_ALTERNATION = "|".join(
    re.escape(u) for u in sorted(UNIT_TO_MM, key=len, reverse=True)
)
_MEASUREMENT = re.compile(
    r"(\d+(?:\.\d+)?)\s*(?:(" + _UNIT_ALTERNATION + r")(?![a-z]))?",
    re.IGNORECASE,
)


def option_key(option: str) -> str:
    """Comparison key for dedup: lowercase, all whitespace removed."""
    if not option:
        return ""
    return _WHITESPACE.sub("", option.lower())


@lru_cache(maxsize=512)
def _term_pattern(term: str) -> "re.Pattern":
    # Terms start on a word boundary: "ms" must not fire inside "items".
    # A term ending in a letter may run into a number ("ss" in "ss304").
    tail = r"(?![a-z])" if term[-1].isalpha() else r"(?![a-z0-9])"
    return re.compile(r"(?<![a-z0-9])" + re.escape(term) + tail)


def _contains_term(text: str, group: Sequence[str]) -> bool:
    return any(_term_pattern(term).search(text) for term in group)


def _first_number(text: str) -> Optional[str]:
    match = _GRADE_NUMBER.search(text)
    return match.group(1) if match else None


def parse_measurement_mm(option: str) -> Optional[float]:
    """
    Parse the first number (+ optional unit) of an option into millimetres.

    Examples:
        '1219 mm'  -> 1219.0
        '4 ft'     -> 1219.2
        '2.5"'     -> 63.5
        '10'       -> 10.0   (bare number is taken as mm)
        'Round'    -> None
    """
    if not option:
        return None
    match = _MEASUREMENT.search(option.lower())
    if not match:
        return None
    value = float(match.group(1))
    unit = (match.group(2) or "mm").lower()
    return value * UNIT_TO_MM.get(unit, 1.0)


def _material_match(clean_a: str, clean_b: str) -> Optional[bool]:
    """True/False when a material group decides, None when no group applies."""
    for group in MATERIAL_GROUPS:
        if _contains_term(clean_a, group) and _contains_term(clean_b, group):
            num_a = _first_number(clean_a)
            num_b = _first_number(clean_b)
            if num_a and num_b and num_a != num_b:
                return False
            return True
    return None


def _measurement_match(clean_a: str, clean_b: str, tolerance_mm: float) -> bool:
    meas_a = parse_measurement_mm(clean_a)
    meas_b = parse_measurement_mm(clean_b)
    if meas_a is None or meas_b is None:
        return False
    return abs(meas_a - meas_b) < tolerance_mm


def _shape_finish_match(clean_a: str, clean_b: str) -> bool:
    for group in SHAPE_FINISH_GROUPS:
        if _contains_term(clean_a, group) and _contains_term(clean_b, group):
            return True
    return False


def _clean_pair(option_a: str, option_b: str) -> Optional[Tuple[str, str]]:
    if not option_a or not option_b:
        return None
    clean_a = option_a.lower().strip()
    clean_b = option_b.lower().strip()
    if not clean_a or not clean_b:
        return None
    return clean_a, clean_b


def are_options_exactly_equal(option_a: str, option_b: str) -> bool:
    """Rules 1-2: equal ignoring case and whitespace."""
    pair = _clean_pair(option_a, option_b)
    if pair is None:
        return False
    clean_a, clean_b = pair
    return clean_a == clean_b or option_key(clean_a) == option_key(clean_b)


def are_options_strongly_similar(
    option_a: str,
    option_b: str,
    tolerance_mm: float = DEFAULT_THRESHOLDS.measurement_tolerance_mm,
) -> bool:
    """Rules 3-5 only: material/grade, measurement, shape/finish."""
    pair = _clean_pair(option_a, option_b)
    if pair is None:
        return False
    clean_a, clean_b = pair

    material = _material_match(clean_a, clean_b)
    if material is not None:
        return material

    if _measurement_match(clean_a, clean_b, tolerance_mm):
        return True

    return _shape_finish_match(clean_a, clean_b)


def are_options_similar(
    option_a: str,
    option_b: str,
    tolerance_mm: float = DEFAULT_THRESHOLDS.measurement_tolerance_mm,
) -> bool:
    """All rules, in order. Empty options never match."""
    if are_options_exactly_equal(option_a, option_b):
        return True
    return are_options_strongly_similar(option_a, option_b, tolerance_mm)
