from __future__ import annotations
from typing import Dict, Iterable, Optional, Tuple

from splitarchitect.elements.label_set import LabelSet
from splitarchitect.reconstruction.exceptions import MalformedSplitError
from splitarchitect.tree import Node


class Split:
    """
    One bipartition of the leaf universe: the two sides left after removing an edge.

    Both sides are Nodes created for this split alone. The split only keeps a
    reference to them; ownership moves into the growing tree during a build.
    """

    __slots__ = ("side_a", "side_b", "index", "source")

    def __init__(
        self,
        side_a: Node,
        side_b: Node,
        index: int = 0,
        source: Optional[str] = None,
    ):
        self.side_a = side_a
        self.side_b = side_b
        self.index = index
        self.source = source

    @classmethod
    def from_labels(
        cls,
        labels_a: Iterable[str],
        labels_b: Iterable[str],
        encoding: Optional[Dict[str, int]] = None,
        index: int = 0,
        source: Optional[str] = None,
    ) -> "Split":
        """
        Build a split and its two Nodes from two label groups.

        Args:
            labels_a: Labels of the first side, in display order.
            labels_b: Labels of the second side, in display order.
            encoding: Label encoding shared by all splits of one run.
            index: Position of the split in the caller's input.
            source: Original textual record, kept for diagnostics.

        Raises:
            MalformedSplitError: If a side is empty, repeats a label, or the
                sides share a label.
        """
        encoding = encoding if encoding is not None else {}
        labels_a = list(labels_a)
        labels_b = list(labels_b)
        if not labels_a or not labels_b:
            raise MalformedSplitError("Split side must not be empty", source)

        sides = []
        for labels in (labels_a, labels_b):
            node = Node(taxa_encoding=encoding)
            for label in labels:
                try:
                    node.add_local_leaf(label)
                except ValueError:
                    raise MalformedSplitError(
                        f"Label '{label}' appears twice on one side", source
                    ) from None
            sides.append(node)

        shared = set(labels_a) & set(labels_b)
        if shared:
            raise MalformedSplitError(
                f"Labels {sorted(shared)} appear on both sides", source
            )
        return cls(sides[0], sides[1], index=index, source=source)

    @property
    def minority_size(self) -> int:
        return min(len(self.side_a.local_membership), len(self.side_b.local_membership))

    def minority_node(self) -> Node:
        """Side with fewer local labels; on a tie ``side_b`` is chosen."""
        if len(self.side_a.local_membership) < len(self.side_b.local_membership):
            return self.side_a
        return self.side_b

    def sides(self) -> Tuple[Node, Node]:
        return self.side_a, self.side_b

    @property
    def leaf_universe(self) -> LabelSet:
        return self.side_a.full_membership | self.side_b.full_membership

    def bipartition(self) -> frozenset[frozenset[str]]:
        """Unordered pair of the two label sets, usable for set comparison."""
        return frozenset(
            (self.side_a.full_membership.labels, self.side_b.full_membership.labels)
        )

    def __str__(self) -> str:
        if self.source is not None:
            return self.source
        a = ", ".join(self.side_a.full_membership)
        b = ", ".join(self.side_b.full_membership)
        return f"{a} | {b}"

    def __repr__(self) -> str:
        return f"Split({self})"
