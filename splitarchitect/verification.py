from typing import Any, Dict, FrozenSet, Iterable, List, Set, Tuple

from splitarchitect.elements.split import Split
from splitarchitect.logger import format_set
from splitarchitect.split_matrix import laminar_violations, membership_matrix
from splitarchitect.tree import Node

Bipartition = FrozenSet[FrozenSet[str]]


def tree_splits(roots: Tuple[Node, Node]) -> Set[Bipartition]:
    """
    Bipartitions induced by every edge of a reconstructed tree.

    The root edge separates the two root branches; every parent/child edge
    separates the child's subtree from the rest of the universe.
    """
    root_a, root_b = roots
    labels_a = frozenset(root_a.subtree_labels())
    labels_b = frozenset(root_b.subtree_labels())
    universe = labels_a | labels_b

    splits: Set[Bipartition] = {frozenset((labels_a, labels_b))}
    for root in roots:
        for node in root.traverse()[1:]:
            below = frozenset(node.subtree_labels())
            splits.add(frozenset((below, universe - below)))
    return splits


def format_bipartition(bipartition: Bipartition) -> str:
    sides = sorted(bipartition, key=lambda side: (len(side), sorted(side)))
    return " | ".join(format_set(side) for side in sides)


def verify_reconstruction(result: Any, splits: Iterable[Split]) -> Dict[str, Any]:
    """
    Check a BuildResult against the splits it was built from.

    Args:
        result: The BuildResult returned by TreeBuilder.build.
        splits: The input splits (their full memberships are not modified by
            a build, so they still describe the expected bipartitions).

    Returns:
        A dictionary containing the verification report with the following keys:
        - "success": bool, True if the tree reproduces every input split.
        - "errors": List[str], structural problems and reported build errors.
        - "warnings": List[str], non-fatal observations.
        - "metrics": Dict[str, int], leaf, node and split counts.
    """
    report: Dict[str, Any] = {
        "success": False,
        "errors": [],
        "warnings": [],
        "metrics": {},
    }
    splits = list(splits)

    for error in result.errors:
        report["errors"].append(f"{type(error).__name__}: {error}")

    # 1. Partition preservation between the two root branches
    root_a, root_b = result.roots
    labels_a = root_a.subtree_labels()
    labels_b = root_b.subtree_labels()
    universe = set(result.leaf_universe)
    if labels_a & labels_b:
        report["errors"].append(
            f"Root branches share labels {format_set(labels_a & labels_b)}"
        )
    if labels_a | labels_b != universe:
        report["errors"].append(
            f"Root branches cover {format_set(labels_a | labels_b)}, "
            f"expected {format_set(universe)}"
        )

    # 2. Local membership sizes
    nodes: List[Node] = result.nodes()
    for node in nodes:
        size = len(node.local_membership)
        if size > 1:
            report["errors"].append(
                f"Node {node!r} still holds {size} labels; a split is missing"
            )
        elif size == 0 and len(node.children) < 2:
            report["errors"].append(
                f"Unlabeled node {node!r} has {len(node.children)} children"
            )

    # 3. Laminar family over full memberships
    matrix, _ = membership_matrix([node.full_membership for node in nodes])
    for i, j in laminar_violations(matrix):
        report["errors"].append(
            f"Nodes {nodes[i]!r} and {nodes[j]!r} overlap without nesting"
        )

    # 4. Round trip of the splits
    expected = {split.bipartition() for split in splits}
    observed = tree_splits(result.roots)
    missing = expected - observed
    extra = observed - expected
    for bipartition in sorted(missing, key=format_bipartition):
        report["errors"].append(
            f"Input split {format_bipartition(bipartition)} not in tree"
        )
    for bipartition in sorted(extra, key=format_bipartition):
        report["warnings"].append(
            f"Tree edge {format_bipartition(bipartition)} not among input splits"
        )
    if len(expected) < len(splits):
        report["warnings"].append(
            f"{len(splits) - len(expected)} duplicate split(s) in input"
        )

    report["metrics"] = {
        "leaf_count": len(universe),
        "node_count": len(nodes),
        "labeled_nodes": sum(1 for node in nodes if len(node.local_membership) == 1),
        "input_splits": len(splits),
        "tree_splits": len(observed),
        "missing_splits": len(missing),
        "extra_splits": len(extra),
    }
    report["success"] = not report["errors"]
    return report
