"""Reverse proxy for the fakestoreapi users endpoint with substitute data."""

__version__ = "1.0.0"
