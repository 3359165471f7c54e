"""
Spec Document Loaders
=====================

Turns the already-parsed JSON documents of the upstream stages into
reconciliation models:

    - Stage 1 (seller specs):  seller_specs[].mcats[].finalized_specs
    - Stage 2 (website ISQs):  {config, keys, buyers}
    - Audit:                   [{specification, status, explanation, problematic_options}]

Malformed entries are skipped with a DEBUG log rather than raised: the
engine treats missing data as no evidence.
"""

import json
import logging
from pathlib import Path
from typing import Any, Iterable, List, Optional, Union

from ..reconciliation.models import (
    AuditResult, AuditStatus, InputType, ISQRole, Specification, SpecTier, WebsiteISQs,
)

logger = logging.getLogger(__name__)

TIER_SECTIONS = (
    (SpecTier.PRIMARY, "finalized_primary_specs"),
    (SpecTier.SECONDARY, "finalized_secondary_specs"),
    (SpecTier.TERTIARY, "finalized_tertiary_specs"),
)

_INPUT_TYPES = {
    "radio_button": InputType.SINGLE_SELECT,
    "single_select": InputType.SINGLE_SELECT,
    "single-select": InputType.SINGLE_SELECT,
    "multi_select": InputType.MULTI_SELECT,
    "multi-select": InputType.MULTI_SELECT,
}


class InputDocumentError(ValueError):
    """A spec document could not be read or is not a JSON object/array."""


def load_json_document(path: Union[str, Path]) -> Any:
    """Read a JSON document from disk."""
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        raise InputDocumentError(f"Input file not found: {path}")
    except json.JSONDecodeError as e:
        raise InputDocumentError(f"Invalid JSON in {path}: {e}")
    except UnicodeDecodeError as e:
        raise InputDocumentError(f"Input file is not UTF-8 text: {path}: {e}")
    except OSError as e:
        raise InputDocumentError(f"Cannot read input file {path}: {e}")


def _clean_options(raw: Any) -> List[str]:
    if not isinstance(raw, list):
        return []
    return [str(o).strip() for o in raw if isinstance(o, (str, int, float)) and str(o).strip()]


def _clean_name(raw: Any) -> str:
    return raw.strip() if isinstance(raw, str) else ""


def _as_list(raw: Any) -> list:
    return raw if isinstance(raw, list) else []


def _iter_mcats(stage1_doc: Any) -> Iterable[dict]:
    if not isinstance(stage1_doc, dict):
        return
    for seller_spec in _as_list(stage1_doc.get("seller_specs")):
        if not isinstance(seller_spec, dict):
            continue
        for mcat in _as_list(seller_spec.get("mcats")):
            if isinstance(mcat, dict):
                yield mcat


def load_seller_specs(stage1_doc: Any, include_tertiary: bool = False) -> List[Specification]:
    """
    Flatten a stage 1 document into seller Specifications.

    Order: per category, primary then secondary (then tertiary when
    ``include_tertiary``). Entries without a name or options are skipped.
    """
    specs = []
    skipped = 0
    for mcat in _iter_mcats(stage1_doc):
        mcat_name = mcat.get("category_name") or mcat.get("mcat_name")
        finalized = mcat.get("finalized_specs")
        if not isinstance(finalized, dict):
            continue

        for tier, section in TIER_SECTIONS:
            if tier == SpecTier.TERTIARY and not include_tertiary:
                continue
            block = finalized.get(section)
            if not isinstance(block, dict):
                continue
            for raw in _as_list(block.get("specs")):
                if not isinstance(raw, dict):
                    skipped += 1
                    continue
                name = _clean_name(raw.get("spec_name") or raw.get("name"))
                options = _clean_options(raw.get("options"))
                if not name or not options:
                    skipped += 1
                    logger.debug(f"Skipping malformed {tier.value} spec in '{mcat_name}': {raw!r}")
                    continue
                specs.append(Specification.seller(
                    name, options, tier,
                    input_type=_INPUT_TYPES.get(str(raw.get("input_type", "")).lower()),
                    mcat_name=mcat_name,
                ))

    if skipped:
        logger.info(f"Loaded {len(specs)} seller specs ({skipped} malformed entries skipped)")
    return specs


def _website_spec(raw: Any, role: ISQRole) -> Optional[Specification]:
    if not isinstance(raw, dict):
        return None
    name = _clean_name(raw.get("name") or raw.get("spec_name"))
    if not name:
        return None
    return Specification.website(name, _clean_options(raw.get("options")), role)


def load_website_isqs(stage2_doc: Any) -> WebsiteISQs:
    """Parse a stage 2 document. Nameless entries are dropped, missing options become []."""
    if not isinstance(stage2_doc, dict):
        return WebsiteISQs()

    keys = [s for s in (_website_spec(k, ISQRole.KEY) for k in _as_list(stage2_doc.get("keys"))) if s]
    buyers = [s for s in (_website_spec(b, ISQRole.BUYER) for b in _as_list(stage2_doc.get("buyers"))) if s]
    return WebsiteISQs(
        config=_website_spec(stage2_doc.get("config"), ISQRole.CONFIG),
        keys=keys,
        buyers=buyers,
    )


def load_audit_results(records: Any) -> List[AuditResult]:
    """Parse audit records; unknown statuses are read as incorrect."""
    results = []
    for raw in _as_list(records):
        if not isinstance(raw, dict):
            continue
        name = _clean_name(raw.get("specification"))
        if not name:
            continue
        status_raw = str(raw.get("status", "correct")).strip().lower()
        status = AuditStatus.CORRECT if status_raw == "correct" else AuditStatus.INCORRECT
        results.append(AuditResult(
            specification=name,
            status=status,
            explanation=str(raw.get("explanation") or ""),
            problematic_options=_clean_options(raw.get("problematic_options")),
        ))
    return results
