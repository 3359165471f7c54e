"""
Audit Result Merging
====================

Attaches the external audit verdicts to the original seller specs so the
presentation layer can show one card per spec. Audit records name specs
loosely, so they are matched back with the spec name matcher.
"""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from .models import AuditResult, AuditStatus, Specification
from .name_matcher import are_names_similar


@dataclass
class AuditedSpec:
    spec: Specification
    result: AuditResult

    @property
    def is_correct(self) -> bool:
        return self.result.status == AuditStatus.CORRECT

    def to_dict(self) -> dict:
        data = self.spec.to_dict()
        data["audit"] = self.result.to_dict()
        return data


@dataclass
class AuditSummary:
    correct_count: int = 0
    incorrect_count: int = 0

    @property
    def all_correct(self) -> bool:
        return self.incorrect_count == 0


def find_audit_result(
    spec_name: str, audit_results: Sequence[AuditResult],
) -> Optional[AuditResult]:
    """First record naming this spec, by exact (case-insensitive) or similar name."""
    target = (spec_name or "").strip().lower()
    for result in audit_results:
        if result.specification.strip().lower() == target:
            return result
        if are_names_similar(result.specification, spec_name):
            return result
    return None


def merge_audit_results(
    audit_results: Sequence[AuditResult],
    specs: Sequence[Specification],
) -> List[AuditedSpec]:
    """One AuditedSpec per original spec; unaudited specs count as correct."""
    merged = []
    for spec in specs:
        result = find_audit_result(spec.name, audit_results)
        if result is None:
            result = AuditResult(specification=spec.name, status=AuditStatus.CORRECT)
        merged.append(AuditedSpec(spec=spec, result=result))
    return merged


def summarize_audit(audited: Sequence[AuditedSpec]) -> AuditSummary:
    correct = sum(1 for a in audited if a.is_correct)
    return AuditSummary(correct_count=correct, incorrect_count=len(audited) - correct)
