"""pagegit - publish a markdown vault to a git repository."""

__version__ = "0.1.0"
