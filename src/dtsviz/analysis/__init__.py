"""
External dependency analysis (depends.jar).
"""

from .depends import find_dot_file, run_depends

__all__ = ["find_dot_file", "run_depends"]
