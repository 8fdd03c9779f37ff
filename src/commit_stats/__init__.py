"""commit-stats: GitHub commit activity reports for a user or organization."""

__version__ = "0.1.0"
