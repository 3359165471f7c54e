#!/usr/bin/env python3
"""
Offline reconciliation walk-through: sample stage 1 / stage 2 documents ->
loaders -> reconciliation -> buyer ISQs, then a two-provider comparison
and an audit merge. No network, no files.
"""
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv
load_dotenv(project_root / ".env")

from src.data.loaders import load_audit_results, load_seller_specs, load_website_isqs
from src.orchestrator.logging_config import setup_logging
from src.reconciliation import (
    SpecReconciler, compare_spec_sets, merge_audit_results, summarize_audit,
)


def make_stage1(primary, secondary, category="Perforated Sheets"):
    """Build a stage 1 document with one category."""
    return {
        "seller_specs": [{
            "mcats": [{
                "category_name": category,
                "finalized_specs": {
                    "finalized_primary_specs": {"specs": [
                        {"spec_name": n, "options": o, "input_type": "radio_button"} for n, o in primary
                    ]},
                    "finalized_secondary_specs": {"specs": [
                        {"spec_name": n, "options": o, "input_type": "multi_select"} for n, o in secondary
                    ]},
                    "finalized_tertiary_specs": {"specs": []},
                },
            }],
        }],
    }


STAGE1_A = make_stage1(
    primary=[
        ("Material", ["SS304", "SS316", "MS", "GI", "Aluminium"]),
        ("Thickness", ["0.5 mm", "0.8 mm", "1 mm", "1.5 mm", "2 mm"]),
        ("Sheet Size", ["1219 mm x 2438 mm", "1250 mm x 2500 mm"]),
    ],
    secondary=[
        ("Hole Shape", ["Round", "Square", "Slotted", "Hexagonal"]),
        ("Finish", ["Mill", "Polished", "Powder Coated"]),
    ],
)

STAGE1_B = make_stage1(
    primary=[
        ("Material Type", ["Stainless Steel 304", "Mild Steel", "Copper"]),
        ("Thk. (mm)", ["1mm", "2mm", "3mm"]),
    ],
    secondary=[
        ("Perforation Type", ["Circular", "Slot"]),
        ("Colour", ["Silver"]),
    ],
)

STAGE2 = {
    "config": {"name": "Material", "options": ["SS 304", "Mild Steel", "Galvanized Iron"]},
    "keys": [
        {"name": "Thk", "options": ["1mm", "2 mm"]},
        {"name": "Sheet Dimensions", "options": ["4 ft x 8 ft"]},
        {"name": "Perforation Type", "options": ["Circular", "Slot"]},
    ],
    "buyers": [
        {"name": "Surface Finish", "options": ["Mill Finish", "Mirror"]},
    ],
}

AUDIT = [
    {"specification": "Material", "status": "correct"},
    {"specification": "Hole Pattern", "status": "incorrect",
     "explanation": "Hexagonal holes are not stocked for this category",
     "problematic_options": ["Hexagonal"]},
]


def main():
    setup_logging(level="INFO")

    print("=" * 60)
    print("  OFFLINE RECONCILIATION WALK-THROUGH")
    print("=" * 60)
    print()

    # Step 1: Load
    print("[1] LOAD DOCUMENTS")
    print("-" * 40)
    seller = load_seller_specs(STAGE1_A)
    website = load_website_isqs(STAGE2)
    print(f"  Seller specs: {len(seller)}")
    print(f"  Website specs: {len(website.all_specs())}")

    # Step 2: Reconcile
    print()
    print("[2] RECONCILE")
    print("-" * 40)
    result = SpecReconciler().run(seller, website)
    for pair in result.common_specs:
        print(f"  [{pair.combined_priority}] {pair.name} ~ {pair.website_name}: {', '.join(pair.options)}")
    print()
    for i, isq in enumerate(result.buyer_isqs, 1):
        print(f"  Buyer ISQ {i}: {isq.name} -> {', '.join(isq.options)}")

    # Step 3: Compare providers
    print()
    print("[3] COMPARE SELLER DRAFTS")
    print("-" * 40)
    comparison = compare_spec_sets(
        load_seller_specs(STAGE1_A, include_tertiary=True),
        load_seller_specs(STAGE1_B, include_tertiary=True),
    )
    for common in comparison.common_specs:
        print(f"  {common.name_a} ~ {common.name_b}: {', '.join(common.common_options) or '-'}")
    print(f"  Agreement: {comparison.agreement_rate:.0%}")

    # Step 4: Audit
    print()
    print("[4] AUDIT MERGE")
    print("-" * 40)
    audited = merge_audit_results(load_audit_results(AUDIT), seller)
    for a in audited:
        print(f"  {'OK ' if a.is_correct else 'BAD'} {a.spec.name}")
    summary = summarize_audit(audited)
    print(f"  Correct: {summary.correct_count}  Incorrect: {summary.incorrect_count}")

    return 0 if result.has_common_specs else 1


if __name__ == "__main__":
    sys.exit(main())
