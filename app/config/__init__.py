"""
Configuration package for the complaint portal.

Environment settings and logging configuration.
"""

from app.config.settings import settings, get_settings

__all__ = ['settings', 'get_settings']
