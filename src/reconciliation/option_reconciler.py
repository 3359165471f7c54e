"""
Option Reconciler
=================

Builds the common option list of a matched spec pair. Values always come
from the seller side (A) in their original formatting; website options (B)
only validate them:

    1. Exact tier   -- A options with a case/whitespace-insensitive twin in B
    2. Strong tier  -- A options with a material/measurement/shape match in B
    3. Fill tier    -- remaining A options, original order
    4. Final dedupe, capped at max_options
"""

import logging
from typing import Iterable, List, Sequence

from .option_matcher import are_options_strongly_similar, option_key
from .synonym_tables import DEFAULT_THRESHOLDS

logger = logging.getLogger(__name__)


def dedupe_options(
    options: Iterable[str],
    max_options: int = DEFAULT_THRESHOLDS.max_reconciled_options,
) -> List[str]:
    """Drop blank and case/whitespace-insensitive duplicates, keep first casing."""
    seen = set()
    result = []
    for opt in options:
        if not isinstance(opt, str):
            continue
        key = option_key(opt)
        if not key or key in seen:
            continue
        seen.add(key)
        result.append(opt)
        if len(result) >= max_options:
            break
    return result


def reconcile_options(
    options_a: Sequence[str],
    options_b: Sequence[str],
    max_options: int = DEFAULT_THRESHOLDS.max_reconciled_options,
    tolerance_mm: float = DEFAULT_THRESHOLDS.measurement_tolerance_mm,
) -> List[str]:
    """
    Reconcile seller options (A) against website options (B).

    Returns at most ``max_options`` values drawn from ``options_a``.
    """
    candidates = [opt for opt in (options_a or []) if isinstance(opt, str) and opt.strip()]
    validators = [opt for opt in (options_b or []) if isinstance(opt, str) and opt.strip()]

    result: List[str] = []
    seen = set()

    def _take(opt: str):
        result.append(opt)
        seen.add(option_key(opt))

    # Tier 1: exact
    validator_keys = {option_key(opt) for opt in validators}
    for opt in candidates:
        if len(result) >= max_options:
            break
        key = option_key(opt)
        if key not in seen and key in validator_keys:
            _take(opt)

    exact_count = len(result)

    # Tier 2: strong semantic
    for opt in candidates:
        if len(result) >= max_options:
            break
        if option_key(opt) in seen:
            continue
        for other in validators:
            if are_options_strongly_similar(opt, other, tolerance_mm):
                logger.debug(f"Strong option match: '{opt}' ~ '{other}'")
                _take(opt)
                break

    strong_count = len(result) - exact_count

    # Tier 3: fill from A only
    for opt in candidates:
        if len(result) >= max_options:
            break
        if option_key(opt) not in seen:
            _take(opt)

    final = dedupe_options(result, max_options)
    logger.debug(
        f"Reconciled options: {exact_count} exact, {strong_count} strong, "
        f"{len(final) - exact_count - strong_count} filled"
    )
    return final
