# app/api/__init__.py
"""HTTP API packages, one per version."""
