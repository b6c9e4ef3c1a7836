"""Mirroring of private issues into the public repository."""

from .classifier import Decision, MirrorAction, classify
from .events import IssueEvent, IssueSnapshot
from .link_store import Link, LinkLookup, LinkStore, format_link, parse_link, parse_linked_number
from .reconciler import Reconciler
from .service import MirrorResult, MirrorService

__all__ = [
    # Events
    "IssueEvent",
    "IssueSnapshot",
    # Link store
    "Link",
    "LinkLookup",
    "LinkStore",
    "format_link",
    "parse_link",
    "parse_linked_number",
    # Classification
    "Decision",
    "MirrorAction",
    "classify",
    # Execution
    "Reconciler",
    "MirrorResult",
    "MirrorService",
]
