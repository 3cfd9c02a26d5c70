"""Dependency manifest parsing and package registry models."""

__version__ = "0.1.0"