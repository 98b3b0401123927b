"""Logging package for splitarchitect."""

from splitarchitect.logger.base_logger import AlgorithmLogger
from splitarchitect.logger.table_logger import TableLogger
from splitarchitect.logger.formatting import (
    format_set,
    format_labels,
    format_split,
)

# Unified singleton for reconstruction tracing
rc_logger = TableLogger("SplitReconstruction")
rc_logger.disabled = True

__all__ = [
    "AlgorithmLogger",
    "TableLogger",
    "rc_logger",
    "format_set",
    "format_labels",
    "format_split",
]
