"""depprune — find and drop unused package.json dependencies."""

__version__ = "0.1.0"
