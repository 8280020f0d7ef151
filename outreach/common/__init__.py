"""Common utilities for the outreach backend."""

from .logger import AccessDenialFilter, configure_logging

__all__ = ["AccessDenialFilter", "configure_logging"]
