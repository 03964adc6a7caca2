"""Utility layer errors."""


class UtilError(Exception):
    """Error raised by wiring and infrastructure helpers, not by the domain."""


class DependencyInjectionError(UtilError, ValueError):
    """A provider base has no implementation of the requested kind."""
