"""Custom exception types for the schema testing harness."""

from __future__ import annotations


class SchemaTestingError(RuntimeError):
    """Base class for harness failures."""


class FormNotFoundError(SchemaTestingError):
    """Raised when a named form scope does not exist on the host."""


class ComponentNotFoundError(SchemaTestingError):
    """Raised when a schema component cannot be resolved from its state path."""


class ActionNotFoundError(SchemaTestingError):
    """Raised when a component has no action registered under a name."""


class NestingMismatchError(SchemaTestingError, ValueError):
    """Raised when nested component keys and action names do not line up."""


class UnknownHostMethodError(SchemaTestingError):
    """Raised when a testable is asked to call a method the host does not expose."""


class ActionHalted(Exception):
    """Raised from inside an action callback to keep the action mounted."""
