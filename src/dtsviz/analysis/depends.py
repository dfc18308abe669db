"""
depends.jar collaborator.

Runs the external dependency analyzer and locates the artifacts it writes.
The analyzer is a black box: it gets a language, a source path and an
output base name, and leaves ``<base>.dot`` / ``<base>.json`` behind.
"""

import logging
import shutil
import subprocess
from pathlib import Path
from typing import List

from ..config import DEPENDS_OUTPUT_NAME
from ..core.errors import ArtifactNotFoundError, UpstreamToolError

logger = logging.getLogger(__name__)


def build_depends_command(
    language: str,
    src: Path,
    output_dir: Path,
    jar_path: Path,
    java: str = "java",
    output_name: str = DEPENDS_OUTPUT_NAME,
) -> List[str]:
    return [
        java,
        "-jar", str(jar_path),
        "-d", str(output_dir),
        "-f", "dot",
        "-f", "json",
        language,
        str(src),
        output_name,
    ]


def run_depends(
    language: str,
    src: Path,
    output_dir: Path,
    jar_path: Path,
    java: str = "java",
    output_name: str = DEPENDS_OUTPUT_NAME,
) -> Path:
    """
    Run depends.jar and return the path of the raw DOT file it produced.

    Raises:
        UpstreamToolError: java or the jar is missing, or the analyzer failed.
        ArtifactNotFoundError: The analyzer exited cleanly without a DOT file.
    """
    output_dir.mkdir(parents=True, exist_ok=True)

    if shutil.which(java) is None:
        raise UpstreamToolError("depends", f"java executable not found: {java}")
    if not jar_path.exists():
        raise UpstreamToolError("depends", f"jar not found: {jar_path}")

    cmd = build_depends_command(language, src, output_dir, jar_path, java, output_name)
    logger.info(f"Running depends.jar: {' '.join(cmd)}")

    try:
        completed = subprocess.run(cmd, check=False)
    except OSError as e:
        raise UpstreamToolError("depends", str(e)) from e

    if completed.returncode != 0:
        raise UpstreamToolError(
            "depends",
            f"exited with code {completed.returncode}",
            exit_code=completed.returncode,
        )

    return find_dot_file(output_dir, f"{output_name}.dot")


def find_dot_file(output_dir: Path, filename: str) -> Path:
    """Return ``output_dir/filename`` or raise if it is not there."""
    dot_file = output_dir / filename
    if not dot_file.is_file():
        raise ArtifactNotFoundError(dot_file, "no .dot file found in output")
    return dot_file
