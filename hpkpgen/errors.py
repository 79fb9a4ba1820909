"""Error taxonomy for pin generation. Every error is fatal to a run."""

from typing import Optional


class HpkpError(Exception):
    """Base class for errors that abort header generation."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path

    def __str__(self) -> str:
        msg = super().__str__()
        return f"{self.path}: {msg}" if self.path else msg


class UnknownExtension(HpkpError):
    """Raised when a filename extension maps to no key-bearing document kind."""


class ExtractionFailed(HpkpError):
    """Raised when no public key can be read from a file."""


class InsufficientPins(HpkpError):
    """Raised when fewer than two pins are available for a header."""


class MissingDependency(HpkpError):
    """Raised when the cryptography backend cannot be loaded."""
