"""
ISQ Reconciler Data Module
==========================

Input boundary and configuration:
    - loaders: stage 1 / stage 2 / audit documents -> reconciliation models
    - config: environment-driven settings (.env supported)

Quick Start:
    from src.data import load_seller_specs, load_website_isqs

    seller = load_seller_specs(stage1_doc)
    website = load_website_isqs(stage2_doc)
"""

from .config import get_settings, Settings, ReconciliationConfig
from .loaders import (
    InputDocumentError,
    load_json_document,
    load_seller_specs,
    load_website_isqs,
    load_audit_results,
)
