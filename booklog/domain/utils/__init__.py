"""
Domain utilities module.

Shared helpers for the domain layer that stay independent of
infrastructure concerns.
"""

from .uuid7 import uuid7

__all__ = ["uuid7"]
