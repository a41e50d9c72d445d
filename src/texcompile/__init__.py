"""Command-line client for the remote LaTeX compilation service."""

__version__ = "0.1.0"
