"""Filler territory game move chooser."""

__version__ = "1.0.0"
