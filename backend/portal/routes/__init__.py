"""Aggregate import for all API route modules."""

from . import (
    auth,
    users,
    admin,
    catalog,
    quiz,
    dashboard,
    manager,
    progress,
)

__all__ = [
    "auth",
    "users",
    "admin",
    "catalog",
    "quiz",
    "dashboard",
    "manager",
    "progress",
]
