"""solclean - Remove build output and cache folders from a workspace."""

__version__ = "0.3.0"
