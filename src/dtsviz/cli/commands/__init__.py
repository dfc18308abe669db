"""
dtsviz CLI commands.
"""

from . import convert, export, inspect, run, serve, tree

__all__ = ["convert", "export", "inspect", "run", "serve", "tree"]
