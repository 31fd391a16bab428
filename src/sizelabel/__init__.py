"""size-label — label pull requests by translated-text size."""

__version__ = "1.0.0"
