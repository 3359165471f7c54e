"""
Seller Spec Set Comparison
==========================

Compares two independently drafted seller spec sets (e.g. from two
different model providers) and reports the specs and options they agree
on, plus what is unique to each side.

All tiers take part. Spec names and options are both paired one-to-one.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Sequence

from .models import Specification
from .name_matcher import are_names_similar
from .option_matcher import are_options_similar

logger = logging.getLogger(__name__)


@dataclass
class CommonSpec:
    spec_name: str
    name_a: str
    name_b: str
    common_options: List[str] = field(default_factory=list)
    unique_options_a: List[str] = field(default_factory=list)
    unique_options_b: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "spec_name": self.spec_name,
            "name_a": self.name_a,
            "name_b": self.name_b,
            "common_options": list(self.common_options),
            "unique_options_a": list(self.unique_options_a),
            "unique_options_b": list(self.unique_options_b),
        }


@dataclass
class SpecComparison:
    common_specs: List[CommonSpec] = field(default_factory=list)
    unique_specs_a: List[Specification] = field(default_factory=list)
    unique_specs_b: List[Specification] = field(default_factory=list)

    @property
    def agreement_rate(self) -> float:
        """Share of all distinct specs that both sides produced."""
        total = len(self.common_specs) + len(self.unique_specs_a) + len(self.unique_specs_b)
        if total == 0:
            return 0.0
        return len(self.common_specs) / total

    def to_dict(self) -> dict:
        return {
            "common_specs": [c.to_dict() for c in self.common_specs],
            "unique_specs_a": [
                {"spec_name": s.name, "options": list(s.options or [])} for s in self.unique_specs_a
            ],
            "unique_specs_b": [
                {"spec_name": s.name, "options": list(s.options or [])} for s in self.unique_specs_b
            ],
            "agreement_rate": round(self.agreement_rate, 4),
        }


def find_common_options(options_a: Sequence[str], options_b: Sequence[str]) -> List[str]:
    """A options that pair with a distinct B option; each B option is used once."""
    common = []
    used = set()
    for opt_a in options_a:
        for j, opt_b in enumerate(options_b):
            if j in used:
                continue
            if are_options_similar(opt_a, opt_b):
                common.append(opt_a)
                used.add(j)
                break
    return common


def _unique_options(options: Sequence[str], others: Sequence[str]) -> List[str]:
    return [opt for opt in options if not any(are_options_similar(opt, o) for o in others)]


def compare_spec_sets(
    specs_a: Sequence[Specification],
    specs_b: Sequence[Specification],
) -> SpecComparison:
    """Match spec names one-to-one and split options into common / unique."""
    comparison = SpecComparison()
    matched_b = set()

    for spec_a in specs_a:
        match_idx = None
        for j, spec_b in enumerate(specs_b):
            if j not in matched_b and are_names_similar(spec_a.name, spec_b.name):
                match_idx = j
                break

        if match_idx is None:
            comparison.unique_specs_a.append(spec_a)
            continue

        matched_b.add(match_idx)
        spec_b = specs_b[match_idx]
        comparison.common_specs.append(CommonSpec(
            spec_name=spec_a.name,
            name_a=spec_a.name,
            name_b=spec_b.name,
            common_options=find_common_options(spec_a.options or [], spec_b.options or []),
            unique_options_a=_unique_options(spec_a.options or [], spec_b.options or []),
            unique_options_b=_unique_options(spec_b.options or [], spec_a.options or []),
        ))

    comparison.unique_specs_b = [s for j, s in enumerate(specs_b) if j not in matched_b]

    logger.info(
        f"Compared spec sets: {len(comparison.common_specs)} common, "
        f"{len(comparison.unique_specs_a)} only in A, "
        f"{len(comparison.unique_specs_b)} only in B"
    )
    return comparison
