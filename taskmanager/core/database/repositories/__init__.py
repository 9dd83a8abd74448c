"""
Database repository layer using SQLModel.

Each module provides async data access operations for its corresponding
SQLModel entity models, built on the shared ``AsyncBaseRepository`` interface
and ``AsyncQueryBuilder`` helpers.

Modules:
- base: AsyncBaseRepository interface and AsyncQueryBuilder utilities
- users: User and access token repository operations
- tasks: Task repository operations
"""

from . import base, tasks, users

__all__ = ["base", "tasks", "users"]
