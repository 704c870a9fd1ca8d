"""Functional core - pure business logic with no I/O."""

from .entries import Category, Entry, parse_timestamp
from .ordering import compare_entries, sort_entries, is_canonical
from .pruning import Decision, prune_entries, prune_reason
from .reconcile import Action, ActionKind, Intent, IntentKind, Report, reconcile

__all__ = [
    # Entries
    "Category",
    "Entry",
    "parse_timestamp",
    # Ordering
    "compare_entries",
    "sort_entries",
    "is_canonical",
    # Pruning
    "Decision",
    "prune_entries",
    "prune_reason",
    # Reconciliation
    "Action",
    "ActionKind",
    "Intent",
    "IntentKind",
    "Report",
    "reconcile",
]
