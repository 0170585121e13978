"""
Domain Enums

Enumeration types used across domain entities.
"""

from enum import Enum


class UserRole(str, Enum):
    """Account-wide role carried in access tokens"""

    admin = "admin"
    project_admin = "project_admin"
    member = "member"
