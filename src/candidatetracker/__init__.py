"""Recruiting candidate tracker: classification and lifecycle engine."""

__version__ = "0.1.0"

__all__ = ["__version__"]
