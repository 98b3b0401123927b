"""
Reconstruction of an unrooted tree from the complete set of its splits.

Every split is stored as two Nodes. The splits are ordered by the size of
their smaller side; the most balanced one becomes the root split and its two
sides become the permanent root branches. The minority side of every other
split is then nested, largest first, at the deepest node whose full membership
already covers it. Because tree splits form a laminar family, that node is
unique, and once all splits are placed each node keeps at most one local label.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from splitarchitect.config import BuildConfig
from splitarchitect.elements.label_set import LabelSet
from splitarchitect.elements.split import Split
from splitarchitect.logger import format_labels, format_split, rc_logger
from splitarchitect.parser.split_parser import parse_splits
from splitarchitect.reconstruction.exceptions import (
    EmptyInputError,
    InconsistentSplitError,
    LeafUniverseMismatchError,
    SplitReconstructionError,
)
from splitarchitect.render import pretty_print
from splitarchitect.tree import Node


@dataclass
class BuildResult:
    """Outcome of one reconstruction: the two root branches plus reported errors."""

    root_split: Split
    processed: List[Split] = field(default_factory=list)
    skipped: List[Split] = field(default_factory=list)
    errors: List[SplitReconstructionError] = field(default_factory=list)

    @property
    def roots(self) -> Tuple[Node, Node]:
        return self.root_split.side_a, self.root_split.side_b

    @property
    def is_complete(self) -> bool:
        """False when any split was skipped, i.e. the tree may be under-specified."""
        return not self.errors

    @property
    def leaf_universe(self) -> LabelSet:
        return self.root_split.leaf_universe

    def nodes(self) -> List[Node]:
        root_a, root_b = self.roots
        return root_a.traverse() + root_b.traverse()

    def __iter__(self) -> Iterator[Node]:
        return iter(self.roots)


class TreeBuilder:
    """Orders splits, selects the root split and nests all other splits below it."""

    def __init__(self, config: Optional[BuildConfig] = None):
        self.config = config or BuildConfig()
        self.logger = logging.getLogger(self.config.logger_name)

    @staticmethod
    def order_splits(splits: Iterable[Split]) -> List[Split]:
        """Sort ascending by minority size; ties keep their input order."""
        return sorted(splits, key=lambda split: split.minority_size)

    def build(self, splits: Sequence[Split]) -> BuildResult:
        """
        Reconstruct the tree described by ``splits``.

        Args:
            splits: All splits of one tree. Each split's Nodes are consumed:
                their minority sides end up inside the returned tree.

        Returns:
            BuildResult holding the root split (whose sides are the two root
            branches) and every error that was reported while building.

        Raises:
            EmptyInputError: If ``splits`` is empty.
            InconsistentSplitError: With ``on_inconsistency="raise"``, for the
                first split that fits under neither root branch.
            LeafUniverseMismatchError: With ``on_inconsistency="raise"``, for the
                first split covering a different leaf universe.
        """
        splits = list(splits)
        if not splits:
            raise EmptyInputError("Cannot build a tree from an empty list of splits")

        previously_disabled = rc_logger.disabled
        if self.config.enable_debug_logging:
            rc_logger.disabled = False
        try:
            return self._build(splits)
        finally:
            rc_logger.disabled = previously_disabled

    def _build(self, splits: List[Split]) -> BuildResult:
        rc_logger.section("Split reconstruction")

        mismatches: List[LeafUniverseMismatchError] = []
        if self.config.check_leaf_universe:
            splits = self._filter_leaf_universe(splits, mismatches)

        ordered = self.order_splits(splits)
        self._log_ordering(ordered)

        root_split = ordered[-1]
        result = BuildResult(root_split=root_split)
        for error in mismatches:
            result.errors.append(error)
            result.skipped.append(error.split)

        root_a, root_b = root_split.sides()
        rc_logger.result("Root split", format_split(root_split))

        for split in reversed(ordered[:-1]):
            candidate = split.minority_node()
            if root_a.is_superset_of(candidate):
                target, branch = root_a, "A"
            elif root_b.is_superset_of(candidate):
                target, branch = root_b, "B"
            else:
                self._report(InconsistentSplitError(split, candidate), result)
                continue

            rc_logger.info(
                f"Inserting {format_labels(candidate.local_membership)} "
                f"from split #{split.index} into root branch {branch}"
            )
            target.insert(candidate)
            result.processed.append(split)

        rc_logger.subsection("Reconstructed tree")
        rc_logger.preformatted(pretty_print(result.roots))
        rc_logger.end_section()
        return result

    def _filter_leaf_universe(
        self, splits: List[Split], errors: List[LeafUniverseMismatchError]
    ) -> List[Split]:
        # Most common universe wins; Counter keeps first-seen order on ties.
        expected, _ = Counter(split.leaf_universe for split in splits).most_common(1)[0]
        accepted: List[Split] = []
        for split in splits:
            actual = split.leaf_universe
            if actual != expected:
                error = LeafUniverseMismatchError(split, expected, actual)
                if self.config.on_inconsistency == "raise":
                    raise error
                self.logger.warning(str(error))
                rc_logger.error(str(error))
                errors.append(error)
                continue
            accepted.append(split)
        return accepted

    def _report(self, error: InconsistentSplitError, result: BuildResult) -> None:
        if self.config.on_inconsistency == "raise":
            raise error
        self.logger.warning(str(error))
        rc_logger.error(str(error))
        result.errors.append(error)
        result.skipped.append(error.split)

    def _log_ordering(self, ordered: List[Split]) -> None:
        if rc_logger.disabled:
            return
        rows = [
            [
                split.index,
                format_split(split),
                split.minority_size,
                format_labels(split.minority_node().local_membership),
            ]
            for split in ordered
        ]
        rc_logger.table(
            rows,
            headers=["input #", "split", "minority size", "minority side"],
            title="Splits in ascending minority order",
        )


def build_tree(
    splits: Sequence[Split], config: Optional[BuildConfig] = None
) -> BuildResult:
    return TreeBuilder(config).build(splits)


def reconstruct(
    records: Iterable[str],
    delimiter: str = "/",
    label_separator: Optional[str] = None,
    config: Optional[BuildConfig] = None,
) -> BuildResult:
    """Parse textual split records and build the tree they describe."""
    splits = parse_splits(records, delimiter=delimiter, label_separator=label_separator)
    return build_tree(splits, config)
