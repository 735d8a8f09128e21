"""Seat inventory and booking consistency for movie showtimes."""

__version__ = "0.1.0"
