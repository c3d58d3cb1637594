"""Product catalog service backed by a single JSON document."""

__version__ = "1.0.0"
