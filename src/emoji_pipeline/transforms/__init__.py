"""Normalization steps applied to a loaded dataset."""
