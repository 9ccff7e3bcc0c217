"""Shared helpers for the activator test-suite."""
