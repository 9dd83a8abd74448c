"""
I/O models for API requests and responses.

This package contains Pydantic-based I/O schemas that define the contract
between API endpoints and clients. These models are separate from database
entities to allow independent evolution of API contracts.

Modules:
- users: Signup, login, profile read and update models
- tasks: Task create, read and update models plus sort parsing
"""

from .tasks import DocumentUploadRead, TaskCreate, TaskRead, TaskUpdate, parse_sort_by
from .users import AuthResponse, LoginRequest, UserCreate, UserRead, UserUpdate

__all__ = [
    "AuthResponse",
    "DocumentUploadRead",
    "LoginRequest",
    "TaskCreate",
    "TaskRead",
    "TaskUpdate",
    "UserCreate",
    "UserRead",
    "UserUpdate",
    "parse_sort_by",
]
