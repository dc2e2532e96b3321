"""Operator gateway for Zeebe workflow instances, incidents and definitions."""

__version__ = "0.1.0"
