"""
Application exception hierarchy.

Every fatal condition surfaces as an ApplicationRuntimeError (or subclass)
with the originating cause chained via ``raise ... from``. Request
validation problems are plain ValueErrors so the web layer can map them to
a client error before any service is consulted.
"""

from __future__ import annotations


class ApplicationRuntimeError(Exception):
    """Raised when the console cannot complete an operation."""

    pass


class ConfigurationError(ApplicationRuntimeError):
    """Raised when a configuration or project-info file is invalid or cannot be loaded."""

    pass


class ClassNotFoundError(ApplicationRuntimeError):
    """Raised when a class cannot be located on a project classpath."""

    def __init__(self, class_name: str) -> None:
        super().__init__(f"Class not found on project classpath: {class_name}")
        self.class_name = class_name


class DependencyResolutionError(ApplicationRuntimeError):
    """Raised when a project's dependency set cannot be resolved at all."""

    pass


class BuildExecutionError(ApplicationRuntimeError):
    """Raised when a build tool cannot be started."""

    pass


class TestNotFoundError(ApplicationRuntimeError):
    """Raised when a requested test case does not exist in the project."""

    __test__ = False


class InvalidTestTypeError(ValueError):
    """Raised when a test type string does not name a known TestType."""

    __test__ = False

    def __init__(self, value: str, allowed: list[str]) -> None:
        super().__init__(
            f"Invalid test type '{value}'. Supported types: {allowed}"
        )
        self.value = value
        self.allowed = allowed
