"""Reconstruction of a tree from its complete set of splits."""
