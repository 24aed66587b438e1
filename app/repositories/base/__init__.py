"""
Base repositories package.

Provides base repository infrastructure shared by the domain repositories.
"""

from app.repositories.base.base_repository import BaseRepository

__all__ = ["BaseRepository"]
