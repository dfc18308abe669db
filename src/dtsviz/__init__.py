"""
dtsviz: turn depends and tree-sitter output into interactive graphs.
"""

__version__ = "0.1.0"
