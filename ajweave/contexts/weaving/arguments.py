"""
ajc command-line assembly.

Pure function of the configuration and the per-run directories. Nothing here
can fail: problems with the values surface when ajc runs.
"""

import os
from pathlib import Path
from typing import List

from ajweave.contexts.weaving.config import WeaveConfig

# Lint and warning options passed on every run
QUALITY_FLAGS = [
    "-g:none",
    "-encoding",
    "UTF-8",
    "-time",
    "-warn:constructorName",
    "-warn:packageDefaultMethod",
    "-warn:deprecation",
    "-warn:maskedCatchBlocks",
    "-warn:unusedLocals",
    "-warn:unusedArguments",
    "-warn:unusedImports",
    "-warn:syntheticAccess",
    "-warn:assertIdentifier",
]


def join_paths(paths) -> str:
    """Join paths with the platform path separator, as ajc expects."""
    return os.pathsep.join(str(Path(p).absolute()) for p in paths)


def build_arguments(
    config: WeaveConfig,
    staging_dir: Path,
    source_root: Path,
    log_path: Path,
) -> List[str]:
    """
    Build the ajc argument list.

    Args:
        config: Run configuration
        staging_dir: Output directory handed to ajc (-d)
        source_root: Scratch aspect source root, passed through unchanged
        log_path: File ajc writes its messages to when config.write_to_log is set

    Returns:
        Arguments in the order ajc receives them
    """
    classpath = join_paths(config.existing_classpath())

    args = [
        "-Xset:avoidFinal=true",
        "-Xlint:warning",
        "-inpath",
        join_paths(config.class_dirs),
        "-sourceroots",
        str(source_root.absolute()),
        "-d",
        str(staging_dir.absolute()),
        "-classpath",
        classpath,
        "-aspectpath",
        classpath,
        "-source",
        config.source,
        "-target",
        config.target,
        *QUALITY_FLAGS,
    ]

    if config.write_to_log:
        args += ["-log", str(log_path), "-showWeaveInfo"]

    return args
