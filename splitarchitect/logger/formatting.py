"""Text formatting utilities for logging."""

from typing import Any, Iterable


def format_set(s: Iterable[Any]) -> str:
    """Format set for consistent display."""
    items = sorted(str(x) for x in s)
    if not items:
        return "∅"
    return "{" + ", ".join(items) + "}"


def format_labels(labels: Iterable[str]) -> str:
    """Format an ordered label sequence without re-sorting it."""
    labels = list(labels)
    if not labels:
        return "∅"
    return "[" + ", ".join(labels) + "]"


def format_split(split: Any) -> str:
    """Format a Split as '{a, b} | {c, d}' using full memberships."""
    try:
        return (
            f"{format_set(split.side_a.full_membership)} | "
            f"{format_set(split.side_b.full_membership)}"
        )
    except AttributeError:
        return str(split)
