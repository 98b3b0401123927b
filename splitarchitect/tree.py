from __future__ import annotations
import json
from typing import Optional, Any, Dict, List, Iterable

try:
    from typing import Self
except ImportError:
    from typing_extensions import Self
from splitarchitect.elements.label_set import LabelSet


class Node:
    """
    Vertex of a tree reconstructed from splits.

    A node keeps two views of its labels:

    - ``full_membership``: every label that belongs to this node or any of its
      descendants. Filled while the split is parsed and never changed by
      ``insert``.
    - ``local_membership``: labels still attributed directly to this node,
      i.e. not yet delegated to a child. Shrinks as children are attached.

    Children are owned exclusively; ``parent`` points back to the owner.
    """

    __slots__ = (
        "children",
        "parent",
        "local_membership",
        "taxa_encoding",
        "_members",
        "_full_membership_cache",
    )

    children: List[Self]
    parent: Optional[Self]
    local_membership: List[str]
    taxa_encoding: Dict[str, int]
    _members: set[str]
    _full_membership_cache: Optional[LabelSet]

    def __init__(
        self,
        labels: Optional[Iterable[str]] = None,
        taxa_encoding: Optional[Dict[str, int]] = None,
    ):
        self.children = []
        self.parent = None
        self.local_membership = []
        self.taxa_encoding = taxa_encoding if taxa_encoding is not None else {}
        self._members = set()
        self._full_membership_cache = None
        for label in labels or ():
            self.add_local_leaf(label)

    # ------------------------------------------------------------------
    # Membership
    # ------------------------------------------------------------------

    @property
    def full_membership(self) -> LabelSet:
        if self._full_membership_cache is None:
            self._full_membership_cache = LabelSet(self._members, self.taxa_encoding)
        return self._full_membership_cache

    @property
    def label(self) -> Optional[str]:
        """The sole remaining local label, or None if there is not exactly one."""
        if len(self.local_membership) == 1:
            return self.local_membership[0]
        return None

    def add_local_leaf(self, leaf: str) -> None:
        """Append ``leaf`` to local and full membership (split construction only)."""
        if leaf in self._members:
            raise ValueError(f"Label '{leaf}' is already a member of this node")
        self.local_membership.append(leaf)
        self._members.add(leaf)
        if leaf not in self.taxa_encoding:
            self.taxa_encoding[leaf] = len(self.taxa_encoding)
        self._full_membership_cache = None

    def is_superset_of(self, candidate: "Node") -> bool:
        """True iff our full membership holds every local label of ``candidate``."""
        return self.full_membership.contains_all(candidate.local_membership)

    def _remove_local_leaves(self, going_to_child: "Node") -> None:
        moved = set(going_to_child.local_membership)
        self.local_membership = [x for x in self.local_membership if x not in moved]

    # ------------------------------------------------------------------
    # Insertion
    # ------------------------------------------------------------------

    def insert(self, candidate: "Node") -> None:
        """
        Attach ``candidate`` at the deepest node of this subtree covering it.

        The caller must have checked ``self.is_superset_of(candidate)``. The
        first child that is itself a superset receives the candidate
        recursively; otherwise the candidate becomes a new direct child. Either
        way the candidate's local labels are then removed from our local
        membership. A candidate that already hangs below a node on the path is
        not attached a second time.

        Args:
            candidate: Minority node of a split, transferred into this subtree.

        Raises:
            ValueError: If ``candidate`` is this node.
        """
        if candidate is self:
            raise ValueError("Cannot insert a node into itself")

        for child in self.children:
            if child is candidate:
                break
            if child.is_superset_of(candidate):
                child.insert(candidate)
                break
        else:
            self.children.append(candidate)
            candidate.parent = self

        self._remove_local_leaves(candidate)

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def is_leaf(self) -> bool:
        return not self.children

    def is_internal(self) -> bool:
        return not self.is_leaf()

    def get_root(self) -> Self:
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    def traverse(self) -> List[Self]:
        """Return this node and all descendants in pre-order."""
        nodes: List[Self] = []
        stack: List[Self] = [self]
        while stack:
            node = stack.pop()
            nodes.append(node)
            stack.extend(reversed(node.children))
        return nodes

    def subtree_labels(self) -> set[str]:
        """Labels still held locally anywhere in this subtree."""
        labels: set[str] = set()
        for node in self.traverse():
            labels.update(node.local_membership)
        return labels

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {
            "labels": list(self.local_membership),
            "members": self.full_membership.to_list(),
            "children": [child.to_dict() for child in self.children],
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=4)

    def __repr__(self) -> str:
        local = ",".join(self.local_membership) or "*"
        return f"Node({local} | {self.full_membership})"

    def __str__(self) -> str:
        return ",".join(self.local_membership) or "*"
