# app/api/v1/__init__.py
"""
API v1 package.

Re-exports the router aggregating the auth, users and complaints
sub-routers; it is mounted under settings.API_V1_STR.
"""

from .router import router as api_router

__all__ = ["api_router"]
