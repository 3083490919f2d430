"""
exceptions.py - Error types raised by PwForge
"""


class PwForgeError(Exception):
    """Base class for all PwForge errors"""


class InvalidRequest(PwForgeError, ValueError):
    """Raised when a generation request has a length of zero or less"""


class ClipboardUnavailable(PwForgeError):
    """Raised when no clipboard mechanism can be used on this system"""


class ConfigError(PwForgeError, ValueError):
    """Raised when a configuration value cannot be parsed"""

    def __init__(self, key: str, message: str):
        super().__init__(f"{key}: {message}")
        self.key = key
