"""Surfboard Finder — rank surfboards for a rider's weight, wave, and ability."""

__version__ = "0.1.0"
