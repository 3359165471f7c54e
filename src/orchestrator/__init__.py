"""
ISQ Reconciler Orchestrator Module
==================================

Command-line entry point and logging setup.

Usage:
    python -m src.orchestrator.cli reconcile --seller stage1.json --website stage2.json
"""

from .logging_config import setup_logging, JSONFormatter
