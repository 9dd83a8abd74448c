"""
Core utilities and configuration for the task manager.

This package provides core functionality including logging configuration,
database setup, security helpers and the domain error taxonomy.
"""

from taskmanager.core.logging_config import get_logger, setup_logging

__all__ = ["get_logger", "setup_logging"]
