# label_set.py
from typing import Dict, FrozenSet, Iterable, Iterator, Optional, Any
from functools import total_ordering


@total_ordering
class LabelSet:
    __slots__ = ("labels", "encoding", "bitmask")

    def __init__(
        self, labels: Iterable[str], encoding: Optional[Dict[str, int]] = None
    ):
        """
        LabelSet represents an immutable set of leaf labels.
        encoding: dict mapping leaf labels (str) to bit positions (int).

        The encoding is shared by every LabelSet of one leaf universe and is
        extended in place when an unseen label shows up, so two sets built
        against the same encoding compare through their bitmasks alone.
        """
        self.labels: FrozenSet[str] = frozenset(labels)
        self.encoding: Dict[str, int] = encoding if encoding is not None else {}

        bitmask = 0
        for label in self.labels:
            if label not in self.encoding:
                self.encoding[label] = len(self.encoding)
            bitmask |= 1 << self.encoding[label]
        self.bitmask: int = bitmask

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.labels))

    def __len__(self) -> int:
        return len(self.labels)

    def __contains__(self, label: object) -> bool:
        return label in self.labels

    def contains(self, label: str) -> bool:
        """Return True if ``label`` is a member of this set."""
        return label in self.labels

    def contains_all(self, other: Iterable[str]) -> bool:
        """
        Return True iff every element of ``other`` is present.

        Another LabelSet sharing this set's encoding is answered with a single
        bitmask test; any other iterable is checked element by element.
        """
        if isinstance(other, LabelSet) and other.encoding is self.encoding:
            return other.bitmask & ~self.bitmask == 0
        return all(label in self.labels for label in other)

    def issubset(self, other: "LabelSet") -> bool:
        return other.contains_all(self)

    def isdisjoint(self, other: Iterable[str]) -> bool:
        if isinstance(other, LabelSet) and other.encoding is self.encoding:
            return self.bitmask & other.bitmask == 0
        return self.labels.isdisjoint(other)

    def union(self, other: Iterable[str]) -> "LabelSet":
        return LabelSet(self.labels.union(other), self.encoding)

    def __or__(self, other: Any) -> "LabelSet":
        if isinstance(other, LabelSet):
            return self.union(other)
        return NotImplemented

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, LabelSet):
            return self.labels == other.labels
        if isinstance(other, (set, frozenset)):
            return self.labels == other
        return NotImplemented

    def __lt__(self, other: Any) -> bool:
        if isinstance(other, LabelSet):
            return tuple(self) < tuple(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.labels)

    def __str__(self) -> str:
        return "{" + ", ".join(self) + "}"

    def __repr__(self) -> str:
        return f"LabelSet({self})"

    def to_list(self) -> list[str]:
        return list(self)
