"""Wanderplan: AI travel itineraries with grounded sources and budget tracking."""

__version__ = "1.0.0"
