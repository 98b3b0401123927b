import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Sequence, Set, Tuple

import pytest

from splitarchitect.logger import rc_logger

SCENARIO_A = ["b/acde", "ba/cde", "bace/d", "bacd/e"]

ORIGINAL_CASE_2 = [
    "ABD/CEFG",
    "BD/ACEFG",
    "D/ABCEFG",
    "G/ABCDEF",
    "E/ABCDFG",
    "EF/ABCDG",
]


def pytest_configure(config):
    """Set up test environment before tests run."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@pytest.fixture(autouse=True)
def quiet_trace_logger():
    """Keep the trace logger disabled and empty between tests."""
    rc_logger.disabled = True
    rc_logger.clear()
    yield
    rc_logger.disabled = True
    rc_logger.clear()


def _split_records_from_edges(
    edges: Sequence[Tuple[str, str]], hidden: Iterable[str] = ()
) -> List[str]:
    """
    Enumerate the split of every edge of a tree given as an edge list.

    Vertices in ``hidden`` are unlabeled branch points and do not appear in
    the records. Records use ',' between labels and '/' between sides; the
    first side is the component containing the edge's first endpoint.
    """
    hidden = set(hidden)
    adjacency: Dict[str, Set[str]] = defaultdict(set)
    for u, v in edges:
        adjacency[u].add(v)
        adjacency[v].add(u)
    labels = sorted(vertex for vertex in adjacency if vertex not in hidden)

    records = []
    for u, v in edges:
        component = {u}
        stack = [u]
        while stack:
            vertex = stack.pop()
            for neighbour in adjacency[vertex]:
                if {vertex, neighbour} == {u, v} or neighbour in component:
                    continue
                component.add(neighbour)
                stack.append(neighbour)
        side_a = [label for label in labels if label in component]
        side_b = [label for label in labels if label not in component]
        records.append(",".join(side_a) + "/" + ",".join(side_b))
    return records


# Every vertex carries a label.
_LABELED_TREE_EDGES = [
    ("a", "b"),
    ("b", "c"),
    ("b", "d"),
    ("d", "e"),
    ("d", "f"),
    ("f", "g"),
    ("c", "h"),
]

# Phylogenetic tree (A,B),C,(D,E) with unlabeled internal vertices u1..u3.
_PHYLOGENETIC_TREE_EDGES = [
    ("u1", "A"),
    ("u1", "B"),
    ("u1", "u2"),
    ("u2", "C"),
    ("u2", "u3"),
    ("u3", "D"),
    ("u3", "E"),
]
_PHYLOGENETIC_HIDDEN = ("u1", "u2", "u3")


@pytest.fixture
def scenario_a_records() -> List[str]:
    return list(SCENARIO_A)


@pytest.fixture
def original_case_2_records() -> List[str]:
    return list(ORIGINAL_CASE_2)


@pytest.fixture
def labeled_tree_records() -> List[str]:
    """Every split of a tree whose vertices all carry a label."""
    return _split_records_from_edges(_LABELED_TREE_EDGES)


@pytest.fixture
def phylogenetic_tree_records() -> List[str]:
    """Every split of (A,B),C,(D,E); internal vertices are unlabeled."""
    return _split_records_from_edges(_PHYLOGENETIC_TREE_EDGES, _PHYLOGENETIC_HIDDEN)
