from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

from splitarchitect.elements.split import Split
from splitarchitect.reconstruction.exceptions import MalformedSplitError

DEFAULT_DELIMITER = "/"
COMMENT_PREFIX = "#"


# ===================================================================
# 1. LABEL TOKENIZATION
# ===================================================================


def tokenize_side(
    side: str, record: str, delimiter: str, label_separator: Optional[str]
) -> List[str]:
    """
    Split one side of a record into labels.

    Args:
        side: Text of one side (everything before or after the first delimiter)
        record: The complete record, used in error messages
        delimiter: The side delimiter; labels may not contain it
        label_separator: Separator between labels, or None for one label per
            non-whitespace character

    Returns:
        Labels in the order they appear
    """
    if label_separator is None:
        labels = [char for char in side if not char.isspace()]
    else:
        labels = [token.strip() for token in side.split(label_separator)]
        if any(not label for label in labels):
            raise MalformedSplitError("Empty label", record)

    if not labels:
        raise MalformedSplitError("Split side must not be empty", record)

    for label in labels:
        if delimiter in label:
            raise MalformedSplitError(
                f"Label '{label}' contains the delimiter '{delimiter}'", record
            )
    return labels


def split_record(
    record: str,
    delimiter: str = DEFAULT_DELIMITER,
    label_separator: Optional[str] = None,
) -> Tuple[List[str], List[str]]:
    """Split a record on the first delimiter into two label groups."""
    if not delimiter:
        raise ValueError("Delimiter must not be empty")
    if delimiter not in record:
        raise MalformedSplitError(f"Missing delimiter '{delimiter}'", record)

    left, right = record.split(delimiter, 1)
    return (
        tokenize_side(left, record, delimiter, label_separator),
        tokenize_side(right, record, delimiter, label_separator),
    )


# ===================================================================
# 2. SPLIT CONSTRUCTION
# ===================================================================


def parse_split(
    record: str,
    delimiter: str = DEFAULT_DELIMITER,
    label_separator: Optional[str] = None,
    index: int = 0,
    encoding: Optional[Dict[str, int]] = None,
) -> Split:
    """
    Parse a textual split record such as ``"b/acde"`` into a Split.

    Raises:
        MalformedSplitError: If the delimiter is absent, a side or label is
            empty, a label repeats, or both sides share a label.
    """
    record = record.strip()
    labels_a, labels_b = split_record(record, delimiter, label_separator)
    return Split.from_labels(
        labels_a, labels_b, encoding=encoding, index=index, source=record
    )


def parse_splits(
    records: Iterable[str],
    delimiter: str = DEFAULT_DELIMITER,
    label_separator: Optional[str] = None,
) -> List[Split]:
    """
    Parse a sequence of records, skipping blank lines and ``#`` comments.

    All splits share one label encoding. Each split's ``index`` is its position
    among the parsed (non-skipped) records.
    """
    encoding: Dict[str, int] = {}
    splits: List[Split] = []
    for record in records:
        stripped = record.strip()
        if not stripped or stripped.startswith(COMMENT_PREFIX):
            continue
        splits.append(
            parse_split(
                stripped,
                delimiter=delimiter,
                label_separator=label_separator,
                index=len(splits),
                encoding=encoding,
            )
        )
    return splits


def read_splits(
    path: Union[str, Path],
    delimiter: str = DEFAULT_DELIMITER,
    label_separator: Optional[str] = None,
) -> List[Split]:
    """Read one split record per line from ``path``."""
    with open(path, "r", encoding="utf-8") as handle:
        return parse_splits(
            handle.readlines(), delimiter=delimiter, label_separator=label_separator
        )
