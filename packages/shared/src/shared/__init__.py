"""Shared primitives used across packages."""
