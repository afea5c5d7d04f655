"""Leaderboard backend for the Hunter browser game."""

__version__ = "1.0.0"
