"""Shared utilities for vendify."""
