"""
Batch pipeline behind ``dtsviz run``.

Stages run sequentially and each one overwrites its previous outputs, so
the whole batch can be re-run safely:

1. depends.jar -> raw DOT/JSON -> conversion to canonical artifacts
2. tree-sitter -> per-file tree dumps (text, JSON, DOT)
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .analysis.depends import find_dot_file, run_depends
from .config import CONVERTED_MARKER, VisualizerSettings
from .conversion.converter import ConversionReport, convert_dot_ids
from .parsing.tree_sitter import TreeArtifacts, parse_sources

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    conversion: Optional[ConversionReport] = None
    trees: List[TreeArtifacts] = field(default_factory=list)

    @property
    def converted_dot(self) -> Optional[Path]:
        return self.conversion.converted_dot if self.conversion else None


def run_dependency_stage(
    language: str,
    source: Path,
    output_dir: Path,
    settings: VisualizerSettings,
) -> ConversionReport:
    dot_file = run_depends(
        language,
        source,
        output_dir,
        jar_path=settings.depends_jar,
        java=settings.java,
        output_name=settings.depends_output_name,
    )
    report = convert_dot_ids(dot_file)
    # The converted artifact must exist before anything downstream relies on it
    find_dot_file(output_dir, f"{settings.depends_output_name}{CONVERTED_MARKER}.dot")
    return report


def run_pipeline(
    language: str,
    source: Path,
    output_dir: Path,
    settings: VisualizerSettings,
    only_tree_sitter: bool = False,
    only_depends: bool = False,
) -> PipelineResult:
    """
    Run the requested stages.

    Raises:
        DtsvizError: Any stage failed in a way the batch cannot recover from.
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    result = PipelineResult()

    if not only_tree_sitter:
        logger.info("Running dependency analysis")
        result.conversion = run_dependency_stage(language, source, output_dir, settings)

    if not only_depends:
        logger.info("Running tree-sitter on source files")
        result.trees = parse_sources(source, output_dir, language)

    return result
