"""Top-level vendify commands."""
