# src/termtest/exceptions.py

"""
Custom exceptions for termtest.
"""

from pathlib import Path


class TermtestError(Exception):
    """Base class for all termtest errors."""

    pass


class ConfigurationError(TermtestError):
    """Raised when configuration is missing, invalid, or cannot be resolved."""

    def __init__(self, message: str, path: Path | str | None = None):
        self.path = path
        full_message = message
        if path:
            full_message += f" (Config: '{path}')"
        super().__init__(full_message)


class DeclarationError(TermtestError):
    """Base class for errors raised while declaring tests, groups, or hooks."""

    pass


class InvalidDeclarationError(DeclarationError):
    """Raised when a test or group declaration is called with invalid arguments."""

    pass


class DeclarationContextError(DeclarationError):
    """Raised when a declaration call happens outside of a test-file load pass."""

    pass


class HookRegistrationError(DeclarationError, TypeError):
    """Raised when a lifecycle hook is registered with a non-callable."""

    def __init__(self, kind: str, value: object):
        self.kind = kind
        super().__init__(f"{kind} expects a function, got {type(value).__name__}")


class TestLoadError(TermtestError):
    """Raised when a test file fails during its declaration pass."""

    __test__ = False  # not a pytest test class

    def __init__(self, message: str, filepath: str, details: Exception | None = None):
        self.filepath = filepath
        self.details = details
        super().__init__(f"{message} (File: '{filepath}')")
        if details is not None:
            self.add_note(f"Original error: {type(details).__name__}: {details}")


# 🔼⚙️
