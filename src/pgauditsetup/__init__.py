"""
pgaudit-setup - Install and configure pgAudit inside a running PostgreSQL container
"""

__version__ = "0.1.0"

from .core import PgAuditSetup, SetupError

__all__ = ["PgAuditSetup", "SetupError"]
