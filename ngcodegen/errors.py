"""Exceptions raised while deriving Angular client metadata.

Every error aborts the generation run; none of them are retried.
"""

from __future__ import annotations


class GeneratorError(Exception):
    """Base exception for code generation errors."""


class ConfigError(GeneratorError):
    """Exception raised for configuration-related errors."""


class VersionError(ConfigError):
    """A configured version string could not be parsed."""

    def __init__(self, version: str, reason: str) -> None:
        super().__init__(f"Invalid version {version!r}: {reason}")
        self.version = version


class UnsupportedHttpMethodError(GeneratorError):
    """An operation uses an HTTP method the legacy Http client cannot express."""

    def __init__(self, method: str) -> None:
        super().__init__(f"Unknown HTTP Method {method} not allowed")
        self.method = method


class PathTemplateError(GeneratorError):
    """A path template has unbalanced placeholder braces."""

    def __init__(self, path: str, position: int, reason: str) -> None:
        super().__init__(f"{reason} at position {position} in path {path!r}")
        self.path = path
        self.position = position
