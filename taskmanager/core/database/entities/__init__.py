"""
Database entity models.

Modules:
- users: User accounts and their issued access tokens
- tasks: Tasks owned by users
"""

from . import tasks, users

__all__ = ["tasks", "users"]
