"""Queryable index over the HWP file format specification documents."""

__version__ = "0.1.0"
