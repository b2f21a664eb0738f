"""
Chirpy Database Models

This module exports all SQLAlchemy models for the application.
"""

from chirpy.models.user import User
from chirpy.models.refresh_token import RefreshToken

__all__ = [
    "User",
    "RefreshToken",
]
