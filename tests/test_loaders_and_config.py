"""
Tests for Spec Document Loaders and Configuration
=================================================

Coverage:
- Stage 1 flattening (tier order, tertiary exclusion, input types)
- Stage 2 parsing (roles, priorities, nameless entries)
- Audit record parsing
- File loading errors
- Environment-driven settings

Usage:
    pytest tests/test_loaders_and_config.py -v
"""

import json

import pytest
from src.data.config import ReconciliationConfig, get_settings, reset_settings
from src.data.loaders import (
    InputDocumentError, load_audit_results, load_json_document,
    load_seller_specs, load_website_isqs,
)
from src.reconciliation.models import AuditStatus, InputType, ISQRole, SpecTier


def make_stage1(primary=None, secondary=None, tertiary=None, category="Perforated Sheets"):
    return {
        "seller_specs": [{
            "mcats": [{
                "category_name": category,
                "finalized_specs": {
                    "finalized_primary_specs": {"specs": primary or []},
                    "finalized_secondary_specs": {"specs": secondary or []},
                    "finalized_tertiary_specs": {"specs": tertiary or []},
                },
            }],
        }],
    }


STAGE1 = make_stage1(
    primary=[
        {"spec_name": "Material", "options": ["SS304", "MS"], "input_type": "radio_button"},
        {"spec_name": "Thickness", "options": ["1 mm", "2 mm"], "input_type": "multi_select"},
    ],
    secondary=[{"spec_name": "Finish", "options": ["Mill", "Polished"]}],
    tertiary=[{"spec_name": "Brand", "options": ["Jindal"]}],
)

STAGE2 = {
    "config": {"name": "Material Type", "options": ["SS 304", "GI"]},
    "keys": [
        {"name": "Thk", "options": ["1mm"]},
        {"name": "Hole Shape"},
    ],
    "buyers": [{"name": "Finish", "options": ["Mill"]}, {"options": ["orphan"]}],
}


class TestLoadSellerSpecs:

    def test_flatten_order(self):
        specs = load_seller_specs(STAGE1)
        assert [s.name for s in specs] == ["Material", "Thickness", "Finish"]
        assert [s.tier for s in specs] == [SpecTier.PRIMARY, SpecTier.PRIMARY, SpecTier.SECONDARY]
        assert [s.priority for s in specs] == [3, 3, 2]

    def test_tertiary_excluded_by_default(self):
        names = [s.name for s in load_seller_specs(STAGE1)]
        assert "Brand" not in names

    def test_tertiary_included_on_request(self):
        specs = load_seller_specs(STAGE1, include_tertiary=True)
        assert specs[-1].name == "Brand"
        assert specs[-1].priority == 1

    def test_input_type_and_category(self):
        specs = load_seller_specs(STAGE1)
        assert specs[0].input_type == InputType.SINGLE_SELECT
        assert specs[1].input_type == InputType.MULTI_SELECT
        assert specs[2].input_type is None
        assert all(s.mcat_name == "Perforated Sheets" for s in specs)

    def test_malformed_entries_skipped(self):
        doc = make_stage1(primary=[
            {"spec_name": "", "options": ["A"]},
            {"spec_name": "Colour", "options": []},
            {"options": ["B"]},
            "not a spec",
            {"spec_name": " Size ", "options": ["Small", "", 10]},
        ])
        specs = load_seller_specs(doc)
        assert len(specs) == 1
        assert specs[0].name == "Size"
        assert specs[0].options == ["Small", "10"]

    @pytest.mark.parametrize("doc", [None, [], "text", {}, {"seller_specs": None}])
    def test_non_documents(self, doc):
        assert load_seller_specs(doc) == []


class TestLoadWebsiteISQs:

    def test_roles_and_priorities(self):
        website = load_website_isqs(STAGE2)
        assert website.config.name == "Material Type"
        assert website.config.role == ISQRole.CONFIG
        assert website.config.priority == 3
        assert [k.priority for k in website.keys] == [2, 2]
        assert [b.priority for b in website.buyers] == [1]

    def test_missing_options_kept_as_empty(self):
        website = load_website_isqs(STAGE2)
        assert website.keys[1].name == "Hole Shape"
        assert website.keys[1].options == []

    def test_nameless_entries_dropped(self):
        website = load_website_isqs(STAGE2)
        assert [b.name for b in website.buyers] == ["Finish"]

    def test_all_specs_order(self):
        names = [s.name for s in load_website_isqs(STAGE2).all_specs()]
        assert names == ["Material Type", "Thk", "Hole Shape", "Finish"]

    def test_non_document(self):
        website = load_website_isqs(None)
        assert website.config is None
        assert website.all_specs() == []


class TestLoadAuditResults:

    def test_statuses(self):
        results = load_audit_results([
            {"specification": "Material", "status": "incorrect",
             "explanation": "GI is not stainless", "problematic_options": ["GI"]},
            {"specification": "Thickness", "status": "Correct"},
            {"specification": "Finish", "status": "needs review"},
            {"status": "incorrect"},
        ])
        assert [r.specification for r in results] == ["Material", "Thickness", "Finish"]
        assert results[0].status == AuditStatus.INCORRECT
        assert results[0].problematic_options == ["GI"]
        assert results[1].status == AuditStatus.CORRECT
        assert results[2].status == AuditStatus.INCORRECT

    def test_non_list(self):
        assert load_audit_results({"specification": "Material"}) == []


class TestLoadJsonDocument:

    def test_reads_file(self, tmp_path):
        path = tmp_path / "stage1.json"
        path.write_text(json.dumps(STAGE1), encoding="utf-8")
        assert load_json_document(path) == STAGE1

    def test_missing_file(self, tmp_path):
        with pytest.raises(InputDocumentError, match="not found"):
            load_json_document(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(InputDocumentError, match="Invalid JSON"):
            load_json_document(path)

    def test_non_utf8_file(self, tmp_path):
        path = tmp_path / "latin1.json"
        path.write_bytes(b'{"seller_specs": "\xff\xfe"}')
        with pytest.raises(InputDocumentError, match="not UTF-8"):
            load_json_document(path)

    def test_directory_instead_of_file(self, tmp_path):
        with pytest.raises(InputDocumentError):
            load_json_document(tmp_path)


class TestSettings:

    def setup_method(self):
        reset_settings()

    def teardown_method(self):
        reset_settings()

    def test_defaults(self, monkeypatch):
        for key in ("RECON_MAX_OPTIONS", "RECON_BUYER_ISQ_COUNT",
                    "RECON_MEASUREMENT_TOLERANCE_MM", "RECON_INCLUDE_TERTIARY"):
            monkeypatch.delenv(key, raising=False)
        config = get_settings().reconciliation
        assert config.max_options == 8
        assert config.buyer_isq_count == 2
        assert config.measurement_tolerance_mm == 0.5
        assert config.include_tertiary is False

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("RECON_MAX_OPTIONS", "5")
        monkeypatch.setenv("RECON_BUYER_ISQ_COUNT", "3")
        monkeypatch.setenv("RECON_INCLUDE_TERTIARY", "yes")
        config = get_settings().reconciliation
        thresholds = config.to_thresholds()
        assert thresholds.max_reconciled_options == 5
        assert thresholds.buyer_isq_count == 3
        assert config.include_tertiary is True

    def test_max_options_above_cap_rejected(self, monkeypatch):
        monkeypatch.setenv("RECON_MAX_OPTIONS", "12")
        with pytest.raises(ValueError, match="cannot exceed 8"):
            get_settings()

    def test_singleton(self):
        assert get_settings() is get_settings()

    def test_invalid_integer(self, monkeypatch):
        monkeypatch.setenv("RECON_MAX_OPTIONS", "many")
        with pytest.raises(ValueError, match="must be an integer"):
            ReconciliationConfig()

    def test_validation(self):
        with pytest.raises(ValueError, match="max_options"):
            ReconciliationConfig(max_options=0)
        with pytest.raises(ValueError, match="tolerance"):
            ReconciliationConfig(measurement_tolerance_mm=-1.0)

    def test_production_flag(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "production")
        assert get_settings().is_production()
