"""Canhão Podcast - keep a list of episodes and back it up as plain text."""

__version__ = "0.1.0"
