"""Exceptions raised by the boundary attacher and template helpers."""

from __future__ import annotations

from typing import Any


class ConfigurationError(ValueError):
    """Raised when the configured permissions boundary cannot be used.

    Attributes:
        value: The configured value that failed validation.
    """

    def __init__(self, message: str, value: Any = None) -> None:
        super().__init__(message)
        self.value = value


class TemplateError(RuntimeError):
    """Raised when a CloudFormation template cannot be read or rendered."""

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


__all__ = ["ConfigurationError", "TemplateError"]
