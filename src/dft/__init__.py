"""Depth-First Thinking - a tree-shaped task tracker for the terminal."""

__version__ = "1.0.0"
