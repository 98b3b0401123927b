"""Read-only renderers for reconstructed trees."""

import json
from typing import Any, Dict, Iterable, List

from splitarchitect.tree import Node

UNLABELED = "*"


def node_label(node: Node) -> str:
    """Remaining local labels of ``node``; unlabeled branch points show as '*'."""
    return ",".join(node.local_membership) or UNLABELED


def pretty_print(roots: Iterable[Node]) -> str:
    """
    Render the root branches as an indented ASCII tree.

    Each root branch is drawn as a non-final entry, children follow with
    ``|-`` / ``\\-`` connectors::

         |-a
         | \\-b
         |-c
         | |-e
         | \\-d
    """
    lines: List[str] = []
    for root in roots:
        _pretty_print(root, " ", False, lines)
    return "\n".join(lines)


def _pretty_print(node: Node, indent: str, last: bool, lines: List[str]) -> None:
    if last:
        lines.append(f"{indent}\\-{node_label(node)}")
        indent += "  "
    else:
        lines.append(f"{indent}|-{node_label(node)}")
        indent += "| "

    for i, child in enumerate(node.children):
        _pretty_print(child, indent, i == len(node.children) - 1, lines)


def to_newick(roots: Iterable[Node]) -> str:
    """Newick string of the tree, rooted on the root split's edge."""
    return "(" + ",".join(_to_newick(root) for root in roots) + ");"


def _to_newick(node: Node) -> str:
    label = ",".join(node.local_membership)
    if node.children:
        return "(" + ",".join(_to_newick(ch) for ch in node.children) + ")" + label
    return label


def to_dict(result: Any) -> Dict[str, Any]:
    """Serialize a BuildResult: both root branches plus reported errors."""
    root_a, root_b = result.roots
    return {
        "roots": [root_a.to_dict(), root_b.to_dict()],
        "root_split": str(result.root_split),
        "complete": result.is_complete,
        "errors": [
            {"type": type(error).__name__, "message": str(error)}
            for error in result.errors
        ],
    }


def to_json(result: Any) -> str:
    return json.dumps(to_dict(result), indent=4)
