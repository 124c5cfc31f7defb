"""stashmark: tag, list and move git stash entries owned by an application."""

__version__ = "0.1.0"
