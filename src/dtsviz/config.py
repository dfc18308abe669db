"""
Global Configuration and Defaults.

Centralizes the artifact naming contract between the pipeline stages, the
canvas constants used by the layout builder, and the optional YAML
settings file that overrides them.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Set

import yaml
from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

# --- Server ---
DEFAULT_PORT = 3000
DOT_ROUTE_PREFIX = "/dot"

# --- Artifact naming ---
# Base name handed to depends.jar; keep in sync with the converted names below
DEPENDS_OUTPUT_NAME = "depends-output-file"
CONVERTED_MARKER = ".converted"
DEFAULT_GRAPH_ARTIFACT = f"{DEPENDS_OUTPUT_NAME}{CONVERTED_MARKER}.dot"
TREE_SUFFIX = ".tree"

# --- Radial layout ---
CANVAS_CENTER_X = 400.0
CANVAS_CENTER_Y = 250.0
RADIUS_PER_NODE = 40.0
MIN_RADIUS = 120.0
MAX_RADIUS = 300.0

# --- Hierarchical (dagre) layout ---
RANK_DIR = "TB"
NODE_SEP = 30.0
RANK_SEP = 60.0
EDGE_SEP = 20.0

# --- Source discovery ---
# Extensions handed to tree-sitter, keyed by the language name depends.jar accepts
LANGUAGE_EXTENSIONS: Dict[str, Set[str]] = {
    "python": {".py"},
    "java": {".java"},
    "cpp": {".c", ".cc", ".cpp", ".h", ".hpp"},
    "go": {".go"},
    "kotlin": {".kt"},
    "ruby": {".rb"},
}

DEFAULT_CONFIG_PATH = Path(".dtsviz/config.yaml")


class RadialSettings(BaseModel):
    center_x: float = CANVAS_CENTER_X
    center_y: float = CANVAS_CENTER_Y
    radius_per_node: float = RADIUS_PER_NODE
    min_radius: float = MIN_RADIUS
    max_radius: float = MAX_RADIUS


class HierarchySettings(BaseModel):
    rank_dir: str = RANK_DIR
    node_sep: float = NODE_SEP
    rank_sep: float = RANK_SEP
    edge_sep: float = EDGE_SEP


class VisualizerSettings(BaseModel):
    """
    User-tunable settings.

    Values come from defaults, then the YAML file, then the environment
    (``DTSVIZ_DEPENDS_JAR``, ``DTSVIZ_JAVA``).
    """
    port: int = DEFAULT_PORT
    depends_jar: Path = Path("depends.jar")
    java: str = "java"
    depends_output_name: str = DEPENDS_OUTPUT_NAME
    open_browser: bool = True
    radial: RadialSettings = Field(default_factory=RadialSettings)
    hierarchy: HierarchySettings = Field(default_factory=HierarchySettings)


def _read_yaml(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Ignoring unreadable config {config_path}: {e}")
        return {}

    if not isinstance(data, dict):
        logger.warning(f"Ignoring config {config_path}: top level must be a mapping")
        return {}
    return data


def load_settings(config_path: Optional[Path] = None) -> VisualizerSettings:
    """
    Load settings from YAML, falling back to defaults.

    An explicitly requested file that does not exist is ignored with a
    warning; the pipeline never fails because of configuration.
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
    data: Dict[str, Any] = {}

    if path.exists():
        data = _read_yaml(path)
    elif config_path:
        logger.warning(f"Config file not found: {path}")

    if jar := os.getenv("DTSVIZ_DEPENDS_JAR"):
        data["depends_jar"] = jar
    if java := os.getenv("DTSVIZ_JAVA"):
        data["java"] = java

    try:
        return VisualizerSettings.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Invalid settings in {path}, using defaults: {e}")
        return VisualizerSettings()


def extensions_for(language: str) -> Set[str]:
    """Source extensions to parse for ``language`` (unknown languages get none)."""
    return LANGUAGE_EXTENSIONS.get(language.lower(), set())
