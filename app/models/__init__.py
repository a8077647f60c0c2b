"""
Table definitions package.
"""

from app.models.company import companies
from app.models.job import jobs
from app.models.user import users

__all__ = ["companies", "jobs", "users"]
