"""
Spec Name Matcher (Deterministic)
=================================

Canonicalizes free-text specification names and decides whether two names
denote the same product attribute. Exact, substring and synonym-group rules
only: no edit distance, so every match can be explained from the tables in
``synonym_tables``.

Usage:
    normalize_spec_name("Thk. (mm)")              # -> "thickness"
    are_names_similar("Colour", "Shade")          # -> True
"""

import logging
from typing import List

from .synonym_tables import (
    DEFAULT_THRESHOLDS,
    NAME_FILLER_WORDS,
    NAME_PUNCTUATION,
    NAME_STANDARDIZATIONS,
    NAME_SYNONYM_GROUPS,
    NAME_UNIT_TOKENS,
)

logger = logging.getLogger(__name__)

_PUNCTUATION_TABLE = str.maketrans({ch: " " for ch in NAME_PUNCTUATION})
_DROPPED_TOKENS = NAME_FILLER_WORDS | NAME_UNIT_TOKENS


def _standardize_token(token: str) -> str:
    """Map one token to its canonical form, or return it unchanged."""
    if token in _DROPPED_TOKENS:
        # Fillers are removed later; "for" must not become "hole" via "perforation".
        return token

    canonical = NAME_STANDARDIZATIONS.get(token)
    if canonical is not None:
        return canonical

    if len(token) < DEFAULT_THRESHOLDS.min_partial_token_length:
        return token

    for key, value in NAME_STANDARDIZATIONS.items():
        if key in token or token in key:
            return value
    return token


def spec_name_tokens(raw: str) -> List[str]:
    """Canonical, de-duplicated, filler-free tokens of a spec name."""
    if not raw:
        return []

    text = raw.lower().strip().translate(_PUNCTUATION_TABLE)
    tokens = [_standardize_token(t) for t in text.split() if t]

    seen = set()
    unique_tokens = []
    for token in tokens:
        if token not in seen:
            seen.add(token)
            unique_tokens.append(token)

    return [t for t in unique_tokens if t not in _DROPPED_TOKENS]


def normalize_spec_name(raw: str) -> str:
    """
    Normalize a spec name into a comparable space-joined token string.

    Examples:
        'Thk. (mm)'          -> 'thickness'
        'Sheet Thickness'    -> 'thickness'
        'Colour'             -> 'color'
        'Perforation Type'   -> 'hole type'
        ''                   -> ''
    """
    return " ".join(spec_name_tokens(raw)).strip()


def _synonym_group_index(tokens: List[str]) -> set:
    hits = set()
    for idx, group in enumerate(NAME_SYNONYM_GROUPS):
        if any(token in group for token in tokens):
            hits.add(idx)
    return hits


def are_names_similar(name_a: str, name_b: str) -> bool:
    """
    Decide whether two spec names refer to the same attribute.

    Rules, in order:
        1. Equal normalized forms.
        2. One normalized form is a substring of the other. Intentionally
           loose: "Size" matches "Packet Size".
        3. Both names hit the same synonym group ("Colour" / "Shade").

    An empty (or all-filler) name never matches anything.
    """
    norm_a = normalize_spec_name(name_a)
    norm_b = normalize_spec_name(name_b)
    if not norm_a or not norm_b:
        return False

    if norm_a == norm_b:
        return True
    if norm_a in norm_b or norm_b in norm_a:
        return True

    shared = _synonym_group_index(norm_a.split()) & _synonym_group_index(norm_b.split())
    if shared:
        logger.debug(
            f"Name synonym match: '{name_a}' ~ '{name_b}' "
            f"(group {NAME_SYNONYM_GROUPS[min(shared)][0]})"
        )
        return True
    return False
