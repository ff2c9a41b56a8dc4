"""
Database models package.
"""

from jobly.models.user import User
from jobly.models.company import Company
from jobly.models.job import Job
from jobly.models.application import Application

__all__ = ["User", "Company", "Job", "Application"]
