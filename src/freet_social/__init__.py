"""Freet Social: follower views, group tagging and contact information for Freet."""

__version__ = "1.0.0"
