"""
Repository layer for data access.

Repositories provide an abstraction over the database so services can be
tested against an in-memory SQLite connection or a mock.
"""

from twoam.repositories.base import BaseRepository
from twoam.repositories.tenant import TenantRepository

__all__ = [
    "BaseRepository",
    "TenantRepository",
]
