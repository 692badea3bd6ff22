"""Inspect or clear the shared repository cache."""
