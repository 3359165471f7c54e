"""
Tests for the ISQ Reconciler CLI
================================

Usage:
    pytest tests/test_cli.py -v
"""

import json
import logging

import pytest
from src.orchestrator.cli import build_parser, main
from src.orchestrator.logging_config import JSONFormatter


STAGE1 = {
    "seller_specs": [{
        "mcats": [{
            "category_name": "Perforated Sheets",
            "finalized_specs": {
                "finalized_primary_specs": {"specs": [
                    {"spec_name": "Material", "options": ["SS304", "MS", "Aluminium"]},
                ]},
                "finalized_secondary_specs": {"specs": [
                    {"spec_name": "Colour", "options": ["Silver"]},
                ]},
            },
        }],
    }],
}

STAGE2 = {"config": {"name": "Material Type", "options": ["SS 304", "GI"]}, "keys": [], "buyers": []}


@pytest.fixture(autouse=True)
def restore_root_logging():
    """main() reconfigures the root logger; put it back after each test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def write_json(tmp_path):
    def _write(name, data):
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return str(path)
    return _write


class TestReconcileCommand:

    def test_json_output(self, write_json, capsys):
        code = main([
            "reconcile", "--seller", write_json("s1.json", STAGE1),
            "--website", write_json("s2.json", STAGE2), "--json",
        ])
        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["buyer_isqs"] == [{"name": "Material", "options": ["SS304", "MS", "Aluminium"]}]

    def test_text_output(self, write_json, capsys):
        code = main([
            "reconcile", "--seller", write_json("s1.json", STAGE1),
            "--website", write_json("s2.json", STAGE2),
        ])
        out = capsys.readouterr().out
        assert code == 0
        assert "[6] Material (Primary) ~ Material Type" in out
        assert "1. Material: SS304, MS, Aluminium" in out

    def test_missing_file(self, tmp_path, capsys):
        code = main([
            "reconcile", "--seller", str(tmp_path / "nope.json"),
            "--website", str(tmp_path / "nope2.json"),
        ])
        assert code == 1
        assert "ERROR:" in capsys.readouterr().err

    def test_unreadable_file(self, tmp_path, write_json, capsys):
        seller = tmp_path / "latin1.json"
        seller.write_bytes(b'{"seller_specs": "\xff\xfe"}')
        code = main([
            "reconcile", "--seller", str(seller),
            "--website", write_json("s2.json", STAGE2),
        ])
        assert code == 1
        assert "not UTF-8" in capsys.readouterr().err


class TestOtherCommands:

    def test_normalize(self, capsys):
        assert main(["normalize", "Thk. (mm)", "Colour"]) == 0
        out = capsys.readouterr().out
        assert "'Thk. (mm)' -> 'thickness'" in out
        assert "'Colour' -> 'color'" in out

    def test_compare(self, write_json, capsys):
        path = write_json("s1.json", STAGE1)
        assert main(["compare", "--a", path, "--b", path, "--json"]) == 0
        assert json.loads(capsys.readouterr().out)["agreement_rate"] == 1.0

    def test_audit_incorrect_returns_2(self, write_json, capsys):
        results = [{"specification": "Material", "status": "incorrect", "explanation": "GI missing"}]
        code = main([
            "audit", "--seller", write_json("s1.json", STAGE1),
            "--results", write_json("audit.json", results),
        ])
        assert code == 2
        assert "Incorrect: 1" in capsys.readouterr().out

    def test_audit_all_correct(self, write_json, capsys):
        code = main([
            "audit", "--seller", write_json("s1.json", STAGE1),
            "--results", write_json("audit.json", []), "--json",
        ])
        assert code == 0
        assert json.loads(capsys.readouterr().out)["all_correct"] is True

    def test_no_command(self, capsys):
        assert main([]) == 1

    def test_parser_requires_files(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["reconcile"])


class TestJSONFormatter:

    def test_extra_fields(self):
        record = logging.LogRecord("src.reconciliation", logging.INFO, __file__, 1, "done", None, None)
        record.stage = "reconcile"
        record.inputs_hash = "abc123"
        data = json.loads(JSONFormatter().format(record))
        assert data["msg"] == "done"
        assert data["stage"] == "reconcile"
        assert data["inputs_hash"] == "abc123"
        assert "spec_name" not in data
