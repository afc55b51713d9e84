"""
Error types for the Transverse Mercator projection system.

Configuration is the only failure path: once an engine has been built,
forward and reverse transforms never raise for numeric input.
"""


class ConfigurationError(ValueError):
    """Raised when projection parameters are invalid.

    Subclasses ValueError so callers validating user input with
    ``except ValueError`` also catch it.
    """
