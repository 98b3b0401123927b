"""
Custom exceptions for split-based tree reconstruction.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from splitarchitect.elements.label_set import LabelSet
    from splitarchitect.elements.split import Split
    from splitarchitect.tree import Node


class SplitReconstructionError(Exception):
    """Base exception for split reconstruction errors."""

    pass


class MalformedSplitError(SplitReconstructionError, ValueError):
    """Raised when a split record cannot be turned into two disjoint, non-empty label groups."""

    def __init__(self, message: str, record: Optional[str] = None):
        if record is not None:
            message = f"{message}: {record!r}"
        super().__init__(message)
        self.record = record


class EmptyInputError(SplitReconstructionError, ValueError):
    """Raised when a build is requested without any split."""

    pass


class InconsistentSplitError(SplitReconstructionError):
    """Raised (or reported) when a split's minority side fits under neither root branch.

    The supplied splits then cannot all come from one common tree.
    """

    def __init__(self, split: Split, candidate: Node):
        self.split = split
        self.candidate = candidate
        super().__init__(
            f"Invalid input: split {split} (input #{split.index}) is not nested in "
            f"either root branch; candidate side {candidate.full_membership} "
            f"cannot be placed"
        )


class LeafUniverseMismatchError(SplitReconstructionError):
    """Raised (or reported) when a split covers a different leaf universe than the others."""

    def __init__(self, split: Split, expected: LabelSet, actual: LabelSet):
        self.split = split
        self.expected = expected
        self.actual = actual
        missing = sorted(expected.labels - actual.labels)
        extra = sorted(actual.labels - expected.labels)
        super().__init__(
            f"Split {split} (input #{split.index}) covers a different leaf universe; "
            f"missing: {missing}, unexpected: {extra}"
        )
