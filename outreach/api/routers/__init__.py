"""API routers for the outreach backend."""

from . import access

__all__ = [
    "access",
]
