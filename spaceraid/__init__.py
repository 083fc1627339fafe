"""A small top-down arcade space shooter with a window-free game simulation."""

__version__ = "0.1.2"