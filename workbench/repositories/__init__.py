"""Repository layer for database access.

This module provides repository classes that encapsulate SQL queries
and separate data access from business logic.
"""

from .project import ProjectRepository

__all__ = [
    'ProjectRepository',
]
