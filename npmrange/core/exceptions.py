# npmrange/core/exceptions.py

from typing import Optional

"""
npmrange domain-specific exceptions.

This module contains custom exceptions for the range library, providing
clear error messages and separating concerns between library code (which
raises exceptions) and CLI code (which handles them).
"""

class NpmRangeError(Exception):
    """Base exception for all npmrange errors."""
    pass

# ==============================================================
# ARGUMENT ERRORS
# ==============================================================

class ArgumentError(NpmRangeError):
    """Base exception for precondition violations on public arguments."""
    def __init__(self, param_name: str, message: str):
        self.param_name = param_name
        super().__init__(f"{message} (parameter '{param_name}')")

class NullArgumentError(ArgumentError, TypeError):
    """Raised when a required argument is None."""
    def __init__(self, param_name: str):
        super().__init__(param_name, "Value cannot be None")

class MetadataNotAllowedError(ArgumentError, ValueError):
    """Raised when a version carries build metadata where it is not allowed."""
    def __init__(self, param_name: str, version: object):
        self.version = version
        super().__init__(
            param_name,
            f"Version '{version}' cannot have build metadata"
        )

# ==============================================================
# VERSION ERRORS
# ==============================================================

class InvalidVersionError(NpmRangeError, ValueError):
    """Raised when a version string is not valid SemVer."""
    def __init__(self, text: str, details: Optional[str] = None):
        self.text = text
        self.details = details
        message = f"Invalid version '{text}'"
        if details:
            message += f": {details}"
        super().__init__(message)

# ==============================================================
# RANGE SYNTAX ERRORS
# ==============================================================

class RangeSyntaxError(NpmRangeError, ValueError):
    """Raised when a range expression does not match the npm range grammar."""
    def __init__(self, text: str, position: int, reason: str):
        self.text = text
        self.position = position
        self.reason = reason
        super().__init__(
            f"Invalid range '{text}' at column {position + 1}: {reason}"
        )

class ParseBudgetExceededError(RangeSyntaxError):
    """Raised when parsing a range exceeds its length or step budget."""
    def __init__(self, text: str, position: int, budget: int, kind: str = "steps"):
        self.budget = budget
        self.kind = kind
        super().__init__(text, position, f"parse budget of {budget} {kind} exceeded")

# ==============================================================
# SETTINGS ERRORS
# ==============================================================

class SettingsError(NpmRangeError):
    """Raised when a configuration value cannot be used."""
    def __init__(self, key: str, value: object, details: str):
        self.key = key
        self.value = value
        self.details = details
        super().__init__(f"Invalid value for '{key}': {value!r} ({details})")
