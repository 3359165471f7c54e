"""
ISQ Reconciler CLI
==================

Command-line interface for the reconciliation engine.

Commands:
    reconcile - Match stage 1 seller specs against stage 2 website ISQs
    compare   - Compare two stage 1 seller spec documents
    audit     - Merge audit results into the stage 1 seller specs
    normalize - Show the normalized form of spec names

Usage:
    python -m src.orchestrator.cli reconcile --seller stage1.json --website stage2.json
    python -m src.orchestrator.cli compare --a stage1_a.json --b stage1_b.json --json
    python -m src.orchestrator.cli audit --seller stage1.json --results audit.json
    python -m src.orchestrator.cli normalize "Thk. (mm)" "Sheet Thickness"
"""

import argparse
import json
import sys

from ..data.config import get_settings
from ..data.loaders import (
    InputDocumentError,
    load_audit_results,
    load_json_document,
    load_seller_specs,
    load_website_isqs,
)
from ..reconciliation import (
    SpecReconciler, compare_spec_sets, merge_audit_results, normalize_spec_name,
    summarize_audit,
)
from .logging_config import setup_logging


def cmd_reconcile(args):
    """Reconcile seller specs with website ISQs and select buyer ISQs."""
    config = get_settings().reconciliation
    include_tertiary = args.include_tertiary or config.include_tertiary

    seller = load_seller_specs(load_json_document(args.seller), include_tertiary=include_tertiary)
    website = load_website_isqs(load_json_document(args.website))

    result = SpecReconciler(config.to_thresholds()).run(seller, website)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
        return 0

    print("=" * 60)
    print("STAGE 3 -- SPEC RECONCILIATION")
    print("=" * 60)
    print(f"Seller specs: {result.seller_spec_count}  Website specs: {result.website_spec_count}")
    print(f"Inputs hash: {result.inputs_hash}")
    print()

    print(f"Common specifications ({len(result.common_specs)})")
    print("-" * 50)
    if not result.common_specs:
        print("  No common specifications found.")
    for pair in result.common_specs:
        print(f"  [{pair.combined_priority}] {pair.name} ({pair.category.value}) ~ {pair.website_name}")
        print(f"       Options: {', '.join(pair.options) or '-'}")
    print()

    print(f"Buyer ISQs ({len(result.buyer_isqs)})")
    print("-" * 50)
    if not result.buyer_isqs:
        print("  No buyer ISQs selected.")
    for i, isq in enumerate(result.buyer_isqs, 1):
        print(f"  {i}. {isq.name}: {', '.join(isq.options) or '-'}")

    return 0


def cmd_compare(args):
    """Compare two seller spec documents."""
    specs_a = load_seller_specs(load_json_document(args.a), include_tertiary=True)
    specs_b = load_seller_specs(load_json_document(args.b), include_tertiary=True)
    comparison = compare_spec_sets(specs_a, specs_b)

    if args.json:
        print(json.dumps(comparison.to_dict(), indent=2))
        return 0

    print(f"Common specs: {len(comparison.common_specs)} "
          f"(agreement {comparison.agreement_rate:.0%})")
    for common in comparison.common_specs:
        print(f"  - {common.name_a} ~ {common.name_b}: {', '.join(common.common_options) or '-'}")
    print(f"Only in A: {', '.join(s.name for s in comparison.unique_specs_a) or '-'}")
    print(f"Only in B: {', '.join(s.name for s in comparison.unique_specs_b) or '-'}")
    return 0


def cmd_audit(args):
    """Merge audit verdicts into the seller specs."""
    specs = load_seller_specs(load_json_document(args.seller), include_tertiary=True)
    results = load_audit_results(load_json_document(args.results))
    audited = merge_audit_results(results, specs)
    summary = summarize_audit(audited)

    if args.json:
        print(json.dumps({
            "specs": [a.to_dict() for a in audited],
            "correct_count": summary.correct_count,
            "incorrect_count": summary.incorrect_count,
            "all_correct": summary.all_correct,
        }, indent=2))
    else:
        for a in audited:
            status_icon = "✓" if a.is_correct else "✗"
            print(f"  {status_icon} {a.spec.name}")
            if not a.is_correct and a.result.explanation:
                print(f"       {a.result.explanation}")
        print()
        print(f"Correct: {summary.correct_count}  Incorrect: {summary.incorrect_count}")

    return 0 if summary.all_correct else 2


def cmd_normalize(args):
    """Print normalized spec names."""
    for name in args.names:
        print(f"{name!r} -> {normalize_spec_name(name)!r}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="isq-reconciler",
        description="ISQ specification reconciliation CLI",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    rec_parser = subparsers.add_parser("reconcile", help="Reconcile seller specs with website ISQs")
    rec_parser.add_argument("--seller", required=True, help="Stage 1 seller specs JSON file")
    rec_parser.add_argument("--website", required=True, help="Stage 2 website ISQs JSON file")
    rec_parser.add_argument(
        "--include-tertiary",
        action="store_true",
        help="Also match tertiary seller specs",
    )
    rec_parser.add_argument("--json", action="store_true", help="Output as JSON")

    cmp_parser = subparsers.add_parser("compare", help="Compare two seller spec documents")
    cmp_parser.add_argument("--a", required=True, help="First stage 1 JSON file")
    cmp_parser.add_argument("--b", required=True, help="Second stage 1 JSON file")
    cmp_parser.add_argument("--json", action="store_true", help="Output as JSON")

    audit_parser = subparsers.add_parser("audit", help="Merge audit results into seller specs")
    audit_parser.add_argument("--seller", required=True, help="Stage 1 seller specs JSON file")
    audit_parser.add_argument("--results", required=True, help="Audit results JSON file")
    audit_parser.add_argument("--json", action="store_true", help="Output as JSON")

    norm_parser = subparsers.add_parser("normalize", help="Normalize spec names")
    norm_parser.add_argument("names", nargs="+", help="Spec names")

    return parser


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    log_config = get_settings().logging
    setup_logging(
        level="DEBUG" if args.verbose else log_config.level,
        json_output=log_config.json_logs,
        log_file=log_config.log_file,
    )

    if args.command is None:
        parser.print_help()
        return 1

    commands = {
        "reconcile": cmd_reconcile,
        "compare": cmd_compare,
        "audit": cmd_audit,
        "normalize": cmd_normalize,
    }

    handler = commands.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    try:
        return handler(args)
    except InputDocumentError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
