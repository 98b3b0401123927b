"""Label sets and splits."""
