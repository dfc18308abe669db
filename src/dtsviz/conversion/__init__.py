"""
Conversion of raw depends output into canonical, label-only artifacts.
"""

from .cells import convert_cell_records, load_cell_records
from .converter import ConversionReport, convert_dot_ids
from .labels import basename, resolve_labels
from .rewriter import rewrite_edges

__all__ = [
    "ConversionReport",
    "basename",
    "convert_cell_records",
    "convert_dot_ids",
    "load_cell_records",
    "resolve_labels",
    "rewrite_edges",
]
