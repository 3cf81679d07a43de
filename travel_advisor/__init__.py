"""Conversation core for the voice travel advisor."""

__version__ = "1.0.0"
