from dataclasses import dataclass
from typing import Literal

InconsistencyPolicy = Literal["skip", "raise"]


@dataclass
class BuildConfig:
    """Configuration for a split-to-tree reconstruction.

    Attributes:
        on_inconsistency: ``"skip"`` reports an offending split, leaves the tree
            untouched for it and continues with the remaining splits (the result
            is then marked incomplete). ``"raise"`` aborts the build by raising
            the first error.
        check_leaf_universe: Reject splits whose two sides do not cover the same
            leaf universe as the first split before any insertion happens.
        enable_debug_logging: Turn on the reconstruction trace logger.
        logger_name: Name of the module logger used for warnings.
    """

    on_inconsistency: InconsistencyPolicy = "skip"
    check_leaf_universe: bool = True
    enable_debug_logging: bool = False
    logger_name: str = "splitarchitect.reconstruction"

    def __post_init__(self) -> None:
        if self.on_inconsistency not in ("skip", "raise"):
            raise ValueError(
                f"on_inconsistency must be 'skip' or 'raise', got {self.on_inconsistency!r}"
            )
