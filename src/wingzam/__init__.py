"""Wingzam: speak a bird's name, hear its song."""

__version__ = "0.1.0"
