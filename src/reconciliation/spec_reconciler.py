"""
Specification Reconciler (Deterministic)
========================================

Matches seller-drafted specs (stage 1) against website-derived ISQs
(stage 2), reconciles the options of each matched pair and selects the
buyer-facing ISQs.

Matching is greedy and one-to-one: each seller spec, in order, takes the
unused website spec with a similar name and the highest individual
priority (ties go to the first encountered). Pairs are ranked by combined
priority with a stable sort, so the same inputs always give the same output.

Usage:
    reconciler = SpecReconciler()
    result = reconciler.run(seller_specs, website_isqs)
    result.buyer_isqs
"""

import hashlib
import json
import logging
import time
from datetime import datetime
from typing import List, Optional, Sequence

from .models import (
    BuyerISQ, MatchedSpecPair, ReconciliationResult, Specification,
    SpecTier, WebsiteISQs,
)
from .name_matcher import are_names_similar
from .option_reconciler import dedupe_options, reconcile_options
from .synonym_tables import DEFAULT_THRESHOLDS, TABLES_VERSION, MatchingThresholds

logger = logging.getLogger(__name__)


def _find_best_match(
    spec: Specification,
    candidates: Sequence[Specification],
    used: set,
) -> Optional[int]:
    """Index of the highest-priority unused candidate with a similar name."""
    best_idx = None
    for idx, candidate in enumerate(candidates):
        if idx in used:
            continue
        if not are_names_similar(spec.name, candidate.name):
            continue
        # Strictly greater: ties keep the first encountered.
        if best_idx is None or candidate.priority > candidates[best_idx].priority:
            best_idx = idx
    return best_idx


def reconcile_specs(
    specs_a: Sequence[Specification],
    specs_b: Sequence[Specification],
    thresholds: MatchingThresholds = DEFAULT_THRESHOLDS,
) -> List[MatchedSpecPair]:
    """
    Find one-to-one matches between seller specs (A) and website specs (B).

    Returns pairs deduplicated by case-insensitive name and sorted by
    combined priority, highest first. An empty list means "no common
    specifications", which is a valid outcome.
    """
    if not specs_a or not specs_b:
        return []

    used = set()
    pairs: List[MatchedSpecPair] = []

    for spec in specs_a:
        if not spec.name or not spec.name.strip():
            continue
        best_idx = _find_best_match(spec, specs_b, used)
        if best_idx is None:
            continue

        used.add(best_idx)
        best = specs_b[best_idx]
        pair = MatchedSpecPair(
            name=spec.name,
            category=spec.tier or SpecTier.SECONDARY,
            combined_priority=spec.priority + best.priority,
            options=reconcile_options(
                spec.options, best.options,
                max_options=thresholds.max_reconciled_options,
                tolerance_mm=thresholds.measurement_tolerance_mm,
            ),
            website_name=best.name,
            website_index=best_idx,
            seller_priority=spec.priority,
            website_priority=best.priority,
            seller_options=list(spec.options or []),
            website_options=list(best.options or []),
        )
        pairs.append(pair)
        logger.debug(
            f"Matched '{spec.name}' -> '{best.name}' "
            f"(priority {spec.priority}+{best.priority}={pair.combined_priority})",
            extra={"stage": "reconcile", "spec_name": spec.name,
                   "combined_priority": pair.combined_priority},
        )

    seen_names = set()
    unique_pairs = []
    for pair in pairs:
        key = pair.name.strip().lower()
        if key in seen_names:
            continue
        seen_names.add(key)
        unique_pairs.append(pair)

    # sorted() is stable: equal priorities keep encounter order.
    return sorted(unique_pairs, key=lambda p: p.combined_priority, reverse=True)


def select_buyer_isqs(
    pairs: Sequence[MatchedSpecPair],
    n: int = DEFAULT_THRESHOLDS.buyer_isq_count,
    max_options: int = DEFAULT_THRESHOLDS.max_reconciled_options,
) -> List[BuyerISQ]:
    """Take the top ``n`` already-ranked pairs as buyer ISQs. No re-ranking."""
    if not pairs or n <= 0:
        return []
    return [
        BuyerISQ(name=pair.name, options=dedupe_options(pair.options, max_options))
        for pair in list(pairs)[:min(n, len(pairs))]
    ]


class SpecReconciler:
    """
    Stage 3 of the spec pipeline.

    Consumes parsed seller specs and website ISQs and produces a
    ReconciliationResult (common specs + buyer ISQs).
    """

    def __init__(self, thresholds: Optional[MatchingThresholds] = None):
        self.thresholds = thresholds or DEFAULT_THRESHOLDS

    @staticmethod
    def _compute_inputs_hash(
        seller_specs: Sequence[Specification],
        website_specs: Sequence[Specification],
    ) -> str:
        """Hash the inputs for reproducibility tracking (order-sensitive)."""
        data = {
            "seller": [[s.name, list(s.options or []), s.priority] for s in seller_specs],
            "website": [[s.name, list(s.options or []), s.priority] for s in website_specs],
            "tables": TABLES_VERSION,
        }
        raw = json.dumps(data, sort_keys=True)
        return hashlib.sha256(raw.encode()).hexdigest()[:16]

    def reconcile(
        self,
        seller_specs: Sequence[Specification],
        website_specs: Sequence[Specification],
    ) -> List[MatchedSpecPair]:
        return reconcile_specs(seller_specs, website_specs, self.thresholds)

    def select(self, pairs: Sequence[MatchedSpecPair]) -> List[BuyerISQ]:
        return select_buyer_isqs(
            pairs,
            n=self.thresholds.buyer_isq_count,
            max_options=self.thresholds.max_reconciled_options,
        )

    def run(
        self,
        seller_specs: Sequence[Specification],
        website_isqs: WebsiteISQs,
    ) -> ReconciliationResult:
        """Reconcile both sources and select the buyer ISQs."""
        start = time.monotonic()
        website_specs = website_isqs.all_specs()
        common = self.reconcile(seller_specs, website_specs)
        buyers = self.select(common)

        result = ReconciliationResult(
            generated_at=datetime.now(tz=None),
            common_specs=common,
            buyer_isqs=buyers,
            seller_spec_count=len(seller_specs),
            website_spec_count=len(website_specs),
            inputs_hash=self._compute_inputs_hash(seller_specs, website_specs),
            tables_version=TABLES_VERSION,
        )
        log_extra = {
            "stage": "reconcile",
            "inputs_hash": result.inputs_hash,
            "duration": round(time.monotonic() - start, 4),
        }

        if not common:
            logger.info(
                f"No common specifications between {len(seller_specs)} seller specs "
                f"and {len(website_specs)} website specs",
                extra=log_extra,
            )
        else:
            logger.info(
                f"Reconciled {len(common)} common specs, selected "
                f"{len(buyers)} buyer ISQs: {[b.name for b in buyers]}",
                extra=log_extra,
            )
        return result
