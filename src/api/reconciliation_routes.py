"""
Reconciliation API Routes
=========================

POST /api/reconcile          - common specs + buyer ISQs for a stage 1/2 pair.
POST /api/reconcile/options  - reconcile two option lists.
POST /api/names/similar      - name similarity check with normalized forms.
POST /api/compare            - compare two stage 1 documents.
POST /api/audit/merge        - attach audit verdicts to stage 1 specs.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, HTTPException

from ..data.config import get_settings
from ..data.loaders import load_audit_results, load_seller_specs, load_website_isqs
from ..reconciliation import (
    SpecReconciler, are_names_similar, compare_spec_sets, merge_audit_results,
    normalize_spec_name, reconcile_options, summarize_audit,
)
from .models import (
    AuditMergeRequest, AuditMergeResponse, CompareRequest, NameSimilarityRequest,
    NameSimilarityResponse, OptionsRequest, OptionsResponse, ReconcileRequest,
    ReconcileResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Reconciliation"])


def _require_seller_specs(stage1: Dict[str, Any]):
    if "seller_specs" not in stage1:
        raise HTTPException(status_code=400, detail="stage1 document has no 'seller_specs'")


@router.post("/reconcile", response_model=ReconcileResponse)
async def reconcile(request: ReconcileRequest):
    """
    Reconcile seller specs with website ISQs.

    An empty common_specs list is a valid answer ("no common specifications").
    """
    _require_seller_specs(request.stage1)
    config = get_settings().reconciliation
    include_tertiary = (
        config.include_tertiary if request.include_tertiary is None else request.include_tertiary
    )

    try:
        seller = load_seller_specs(request.stage1, include_tertiary=include_tertiary)
        website = load_website_isqs(request.stage2)
        result = SpecReconciler(config.to_thresholds()).run(seller, website)
        return ReconcileResponse(**result.to_dict())
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Reconciliation failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/reconcile/options", response_model=OptionsResponse)
async def reconcile_option_lists(request: OptionsRequest):
    thresholds = get_settings().reconciliation.to_thresholds()
    return OptionsResponse(options=reconcile_options(
        request.options_a, request.options_b,
        max_options=thresholds.max_reconciled_options,
        tolerance_mm=thresholds.measurement_tolerance_mm,
    ))


@router.post("/names/similar", response_model=NameSimilarityResponse)
async def names_similar(request: NameSimilarityRequest):
    return NameSimilarityResponse(
        similar=are_names_similar(request.name_a, request.name_b),
        normalized_a=normalize_spec_name(request.name_a),
        normalized_b=normalize_spec_name(request.name_b),
    )


@router.post("/compare")
async def compare(request: CompareRequest):
    """Compare two seller spec documents (all tiers)."""
    _require_seller_specs(request.stage1_a)
    _require_seller_specs(request.stage1_b)
    comparison = compare_spec_sets(
        load_seller_specs(request.stage1_a, include_tertiary=True),
        load_seller_specs(request.stage1_b, include_tertiary=True),
    )
    return comparison.to_dict()


@router.post("/audit/merge", response_model=AuditMergeResponse)
async def audit_merge(request: AuditMergeRequest):
    _require_seller_specs(request.stage1)
    specs = load_seller_specs(request.stage1, include_tertiary=True)
    audited = merge_audit_results(load_audit_results(request.audit_results), specs)
    summary = summarize_audit(audited)
    return AuditMergeResponse(
        specs=[a.to_dict() for a in audited],
        correct_count=summary.correct_count,
        incorrect_count=summary.incorrect_count,
        all_correct=summary.all_correct,
    )
