"""
Exception hierarchy for GuardFS.

Guarded file operations never raise these for expected conditions; they are
reserved for genuine faults (bad settings) and the fault demonstrations.
"""


class GuardFSError(Exception):
    """Base class for all GuardFS errors."""


class ConfigError(GuardFSError):
    """Raised when the settings file cannot be parsed or has invalid values."""


class DemoFault(GuardFSError):
    """User-defined fault raised and caught by the fault demonstrations."""
