"""Packaged machine configuration templates."""
