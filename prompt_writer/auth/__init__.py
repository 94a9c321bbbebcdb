"""
Authentication helpers for the Prompt Writer backend.

Public endpoints (catalog, recommendations, search) skip authentication.
Write endpoints depend on get_authenticated_user.
"""

from .dependencies import AuthenticatedUser, get_authenticated_user

__all__ = ["AuthenticatedUser", "get_authenticated_user"]
