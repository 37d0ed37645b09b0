"""Movie app backend: TMDb-backed movie catalogue with user reviews."""

__version__ = "0.1.0"
