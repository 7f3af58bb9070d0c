"""Jotter, a terminal notes composer."""

__version__ = "0.1.0"
