"""Derivation graph tests."""
