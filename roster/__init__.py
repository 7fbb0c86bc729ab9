"""Roster: student record service keeping class and grade level records consistent."""

__version__ = "0.1.0"
