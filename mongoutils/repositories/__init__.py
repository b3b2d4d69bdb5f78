"""
Repository Pattern Implementation

This package contains repository classes that centralize database operations
and provide a consistent interface for data access.
"""

from .base_repository import BaseRepository

__all__ = [
    "BaseRepository",
]
