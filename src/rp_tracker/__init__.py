"""RP Tracker - rank points and match rating engine."""

__version__ = "0.1.0"
