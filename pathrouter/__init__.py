"""Async HTTP request routing with path patterns, middlewares, shared data and error handling."""

__version__ = "0.1.0"