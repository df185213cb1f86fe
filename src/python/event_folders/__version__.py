"""Version information for event-folders."""

__version__ = "0.1.0"
