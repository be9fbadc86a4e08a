"""Identifiers, ballots, data structures, message types and HTTP clients for replicated key-value stores."""

__version__ = "0.1.0"