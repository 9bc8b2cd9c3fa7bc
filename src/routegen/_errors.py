"""Routegen error hierarchy.

All routegen-specific errors inherit from RoutegenError for easy catching.
"""


class RoutegenError(Exception):
    """Base error for all routegen operations."""


class ConfigError(RoutegenError):
    """Invalid or missing configuration."""


class SourceError(RoutegenError):
    """The scan root or the symbol source could not be loaded."""


class ValidationError(RoutegenError):
    """Discovered templates violate a registry invariant."""


class NamingError(ValidationError):
    """A template function breaks the file/function naming rules.

    Naming errors are collected as warnings by the scanner; they never abort
    a run on their own.
    """


class EmitError(RoutegenError):
    """Error while writing the generated registry."""
