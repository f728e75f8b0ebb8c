"""Exceptions for the backport module."""


class BackportError(Exception):
    """Base exception for backport errors."""


class BackportRunError(BackportError):
    """The run as a whole failed and no further targets were processed."""
