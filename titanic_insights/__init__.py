"""Titanic Insights: analytical queries over the Titanic passenger manifest."""

__version__ = "0.1.0"
