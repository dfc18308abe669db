"""
HTTP surface for the viewer.
"""

from .app import create_app, serve

__all__ = ["create_app", "serve"]
