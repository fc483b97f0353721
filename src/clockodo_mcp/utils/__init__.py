"""Input normalization and output formatting helpers."""
