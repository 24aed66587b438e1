"""Shared schema base classes."""
