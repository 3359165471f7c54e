"""
Reconciliation Lookup Tables
============================

Declarative synonym groups, name standardizations, filler words and unit
conversion factors used by the name and option matchers. Deterministic
lookup data only, no matching logic lives here.

Groups are tuples so that iteration order (and therefore the first group
that fires) is stable across runs.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple

# Version of the table data. Bump when any group or mapping below changes.
TABLES_VERSION = "1.3.0"


# =====================================================================
# MATCHING THRESHOLDS
# =====================================================================

@dataclass(frozen=True)
class MatchingThresholds:
    """
    Fixed limits of the reconciliation engine.

    - max_reconciled_options: cap on every reconciled / buyer option list
    - buyer_isq_count: number of buyer-facing ISQs selected from the ranking
    - measurement_tolerance_mm: two measurements closer than this are equal.
      0.5mm lets "4 ft" (1219.2mm) match "1219 mm" while keeping adjacent
      catalogue sizes ("1219 mm" vs "1220 mm") apart.
    - min_partial_token_length: shortest token allowed to canonicalize by
      containment ("dim" -> size) instead of exact lookup
    """
    max_reconciled_options: int = 8
    buyer_isq_count: int = 2
    measurement_tolerance_mm: float = 0.5
    min_partial_token_length: int = 3


DEFAULT_THRESHOLDS = MatchingThresholds()


# =====================================================================
# SPEC NAME NORMALIZATION
# =====================================================================
# token -> canonical token. Order matters for the containment fallback:
# the first key that contains (or is contained by) a token wins.

NAME_STANDARDIZATIONS: Mapping[str, str] = MappingProxyType({
    "material": "material",
    "grade": "grade",
    "thk": "thickness",
    "thickness": "thickness",
    "type": "type",
    "shape": "shape",
    "size": "size",
    "dimension": "size",
    "length": "length",
    "width": "width",
    "height": "height",
    "dia": "diameter",
    "diameter": "diameter",
    "color": "color",
    "colour": "color",
    "finish": "finish",
    "surface": "finish",
    "weight": "weight",
    "wt": "weight",
    "capacity": "capacity",
    "brand": "brand",
    "model": "model",
    "quality": "quality",
    "standard": "standard",
    "specification": "spec",
    "perforation": "hole",
    "hole": "hole",
    "pattern": "pattern",
    "design": "design",
    "application": "application",
    "usage": "application",
})

# Punctuation replaced with a space before tokenizing a spec name.
NAME_PUNCTUATION = "()-_,.;"

# Words that never carry meaning in a spec name.
NAME_FILLER_WORDS = frozenset({
    "sheet", "plate", "pipe", "rod", "bar",
    "in", "for", "of", "the",
    "a", "an", "and", "or", "with", "&", "/",
})

# Bare unit tokens that only annotate a spec name ("Thickness (mm)").
NAME_UNIT_TOKENS = frozenset({
    "mm", "cm", "m", "km", "inch", "inches", "ft", "feet",
    "kg", "g", "gm", "gms", "gsm", "mtr", "meter", "metre",
    "ltr", "l", "ml", "swg", "bwg",
})

# Synonym groups for spec names. Two names sharing a group are the same
# attribute ("Colour" ~ "Shade").
NAME_SYNONYM_GROUPS: Tuple[Tuple[str, ...], ...] = (
    ("material", "composition", "fabric"),
    ("grade", "quality", "class", "standard"),
    ("thickness", "thk", "gauge"),
    ("size", "dimension", "measurement"),
    ("diameter", "dia", "bore"),
    ("length", "long", "lng"),
    ("width", "breadth", "wide"),
    ("height", "high", "depth"),
    ("color", "colour", "shade"),
    ("finish", "surface", "coating", "polish"),
    ("weight", "wt", "mass"),
    ("type", "kind", "variety", "style"),
    ("shape", "form", "profile"),
    ("hole", "perforation", "aperture"),
    ("pattern", "design", "arrangement"),
    ("application", "use", "purpose", "usage"),
)


# =====================================================================
# OPTION EQUIVALENCE
# =====================================================================
# Material / grade groups. When both options hit a group, their first
# standalone number (grade) must still agree.

MATERIAL_GROUPS: Tuple[Tuple[str, ...], ...] = (
    ("304", "ss304", "ss 304", "stainless steel 304"),
    ("316", "ss316", "ss 316", "stainless steel 316"),
    ("430", "ss430", "ss 430"),
    ("201", "ss201", "ss 201"),
    ("202", "ss202", "ss 202"),
    ("ss", "stainless steel", "stainless"),
    ("ms", "mild steel", "carbon steel"),
    ("gi", "galvanized iron", "galvanised iron"),
    ("aluminium", "aluminum", "al"),
    ("cu", "copper"),
    ("pvc", "polyvinyl chloride"),
    ("hdpe", "high density polyethylene"),
    ("crca", "cold rolled", "cr"),
    ("hr", "hot rolled"),
)

# Shape, finish and weave groups. Shared membership is enough.
SHAPE_FINISH_GROUPS: Tuple[Tuple[str, ...], ...] = (
    ("round", "circular", "circle"),
    ("square", "squared"),
    ("rectangular", "rectangle"),
    ("hexagonal", "hexagon", "hex"),
    ("flat", "flat bar"),
    ("angle", "l shape", "l-shape", "l-shaped"),
    ("channel", "c shape", "c-shape", "c-shaped"),
    ("pipe", "tube", "tubular"),
    ("slotted", "slot"),
    ("plain weave", "plain woven"),
    ("twill weave", "twill", "twilled"),
    ("dutch weave", "dutch"),
    ("crimped", "crimp"),
    ("mill finish", "mill"),
    ("polished", "polish", "mirror finish", "mirror"),
    ("galvanized", "galvanised", "zinc coated"),
    ("brushed", "satin", "hairline"),
    ("anodized", "anodised"),
    ("painted", "paint"),
    ("powder coated", "powder coating"),
)


# =====================================================================
# UNIT CONVERSION
# =====================================================================
# unit token -> millimetres per unit. A number without unit is already mm.

UNIT_TO_MM: Mapping[str, float] = MappingProxyType({
    "mm": 1.0,
    "millimeter": 1.0,
    "millimetre": 1.0,
    "cm": 10.0,
    "centimeter": 10.0,
    "centimetre": 10.0,
    "m": 1000.0,
    "meter": 1000.0,
    "metre": 1000.0,
    "inches": 25.4,
    "inch": 25.4,
    "in": 25.4,
    '"': 25.4,
    "feet": 304.8,
    "foot": 304.8,
    "ft": 304.8,
    "'": 304.8,
})
