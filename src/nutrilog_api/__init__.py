"""Nutrilog API - personal nutrition tracking with AI meal analysis."""

__version__ = "0.1.0"
