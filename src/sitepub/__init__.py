"""sitepub — publish a generated static site to its web host."""

__version__ = "0.1.0"
