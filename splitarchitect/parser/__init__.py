"""
Split record parser module.

This module turns textual split records (e.g. ``"b/acde"``) into Split objects
ready for reconstruction.
"""

from .split_parser import (
    parse_split,
    parse_splits,
    read_splits,
    split_record,
    tokenize_side,
)

__all__ = [
    "parse_split",
    "parse_splits",
    "read_splits",
    "split_record",
    "tokenize_side",
]
