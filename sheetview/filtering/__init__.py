"""Relative time windows over normalized records."""
