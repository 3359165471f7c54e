"""
ISQ Specification Reconciler
============================

Deterministic matching of seller-drafted specs against website-derived
ISQs, and selection of buyer-facing ISQs. No LLM required.
"""

from .models import (
    Specification, WebsiteISQs, MatchedSpecPair, BuyerISQ,
    ReconciliationResult, AuditResult, SpecTier, ISQRole, InputType, AuditStatus,
)
from .name_matcher import normalize_spec_name, are_names_similar
from .option_matcher import are_options_similar, are_options_strongly_similar
from .option_reconciler import reconcile_options, dedupe_options
from .spec_reconciler import SpecReconciler, reconcile_specs, select_buyer_isqs
from .comparison import compare_spec_sets, SpecComparison
from .audit import merge_audit_results, summarize_audit
