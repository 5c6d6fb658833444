"""Kingside — rule engine for a two-player chess table."""

__version__ = "0.1.0"
