"""Jobly models - re-exports all models and Base.metadata."""

from .base import Base
from .company import Company
from .job import Job
from .user import User, Application

__all__ = [
    "Base",
    "Company",
    "Job",
    "User",
    "Application",
]
