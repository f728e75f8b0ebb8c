"""portbot - Backport merged pull requests onto the branches named in a comment."""

__version__ = "0.1.0"


def get_version() -> str:
    """Return the installed portbot version."""
    return __version__
