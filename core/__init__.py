# GuardFS - Core Module
"""
Core infrastructure for GuardFS.
Settings, the audit log and the error hierarchy shared by every module.
"""

from .config import Settings, load_settings
from .errors import GuardFSError, ConfigError, DemoFault
from .logger import AuditLogger, AuditEntry, ActionType, ActionStatus

__all__ = [
    "Settings",
    "load_settings",
    "GuardFSError",
    "ConfigError",
    "DemoFault",
    "AuditLogger",
    "AuditEntry",
    "ActionType",
    "ActionStatus",
]

__version__ = "0.1.0"
