from typing import Iterable, List, Optional, Sequence, Tuple
import numpy as np


def membership_matrix(
    label_sets: Sequence[Iterable[str]], universe: Optional[Iterable[str]] = None
) -> Tuple[np.ndarray, List[str]]:
    """
    Build a boolean membership matrix.

    Args:
    - label_sets: One row per set of labels.
    - universe: Column labels. Defaults to the sorted union of all sets.

    Returns:
    - Tuple[np.ndarray, List[str]]: The (rows x labels) matrix and its column labels.
    """
    rows = [set(labels) for labels in label_sets]
    if universe is None:
        columns = sorted(set().union(*rows)) if rows else []
    else:
        columns = sorted(set(universe))
    column_index = {label: i for i, label in enumerate(columns)}

    matrix = np.zeros((len(rows), len(columns)), dtype=bool)
    for i, labels in enumerate(rows):
        for label in labels:
            matrix[i, column_index[label]] = True
    return matrix, columns


def laminar_violations(matrix: np.ndarray) -> List[Tuple[int, int]]:
    """
    Find pairs of rows that overlap without one containing the other.

    Two rows i, j violate the laminar property iff
    0 < |i ∩ j| < min(|i|, |j|).
    """
    if matrix.shape[0] < 2:
        return []
    counts = matrix.astype(np.int64)
    overlap = counts @ counts.T
    sizes = counts.sum(axis=1)
    smaller = np.minimum.outer(sizes, sizes)
    crossing = np.triu((overlap > 0) & (overlap < smaller), k=1)
    return [(int(i), int(j)) for i, j in np.argwhere(crossing)]


def is_laminar(label_sets: Sequence[Iterable[str]]) -> bool:
    matrix, _ = membership_matrix(label_sets)
    return not laminar_violations(matrix)
