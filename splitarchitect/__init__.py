"""Core splitarchitect package: rebuild a tree from its complete set of splits."""

__all__ = [
    "Node",
    "LabelSet",
    "Split",
    "BuildConfig",
    "BuildResult",
    "TreeBuilder",
    "build_tree",
    "reconstruct",
    "parse_split",
    "parse_splits",
]


def __getattr__(name):
    if name == "Node":
        from .tree import Node

        return Node
    if name == "LabelSet":
        from .elements.label_set import LabelSet

        return LabelSet
    if name == "Split":
        from .elements.split import Split

        return Split
    if name == "BuildConfig":
        from .config import BuildConfig

        return BuildConfig
    if name in {"BuildResult", "TreeBuilder", "build_tree", "reconstruct"}:
        from .reconstruction import tree_builder

        return getattr(tree_builder, name)
    if name in {"parse_split", "parse_splits"}:
        from .parser import split_parser

        return getattr(split_parser, name)
    raise AttributeError(name)
