"""Daybook: a personal mood journal with a durable entry store and analytics."""

__version__ = "0.1.0"
