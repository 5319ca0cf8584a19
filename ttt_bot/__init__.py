"""Tic-tac-toe bot: exhaustive minimax move selection behind an HTTP API."""

__version__ = "0.1.0"
