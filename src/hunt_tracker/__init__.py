"""Live location tracker for location-based games."""

__version__ = "0.1.0"
