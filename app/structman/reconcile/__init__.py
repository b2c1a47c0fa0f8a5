"""Reconciliation of structure trees against the filesystem.

This module provides the reconciler, its per-node report, and the
StructureManager entry point used by host applications.
"""

from structman.reconcile.manager import BaseVerification, StructureManager
from structman.reconcile.reconciler import Reconciler, reconcile
from structman.reconcile.report import NodeResult, Outcome, Report

__all__ = [
    "BaseVerification",
    "NodeResult",
    "Outcome",
    "Reconciler",
    "Report",
    "StructureManager",
    "reconcile",
]
