"""Pytest configuration and shared fixtures."""

from hypothesis import settings

# Public key recovery runs in pure Python.
settings.register_profile("no_deadline", deadline=None, max_examples=25)
settings.load_profile("no_deadline")
