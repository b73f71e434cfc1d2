"""Exception hierarchy for the layout core."""

from __future__ import annotations


class LayoutCoreError(Exception):
    """Base exception for all layout-core errors."""

    def __init__(self, message: str, details: dict[str, str] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(LayoutCoreError):
    """Raised when configuration is invalid or missing."""
    pass


class GeometryError(LayoutCoreError):
    """Raised when geometry input cannot be interpreted at all."""
    pass


class ClassificationError(LayoutCoreError):
    """Raised when the classification service cannot be reached or answers garbage."""
    pass


class ConnectionStateError(LayoutCoreError):
    """Raised when a connection step is requested from the wrong state."""
    pass
