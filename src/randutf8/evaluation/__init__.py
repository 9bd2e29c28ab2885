"""Diagnostics for the byte-value spread of generated strings."""
