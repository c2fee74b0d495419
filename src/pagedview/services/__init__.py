"""Headless services backing the view model (no Qt imports)."""
