"""
Weaving Context

Responsibilities:
- Assembles ajc command lines from the weave configuration
- Runs ajc and collects its diagnostics
- Stages ajc output and publishes it into the build's class directory
- Reports diagnostics and decides pass/fail

Owns: ajc invocation, staging directory, diagnostic reporting
Never: Weaves classes itself or resolves classpaths
"""

from ajweave.contexts.weaving.config import WeaveConfig, load_weave_config
from ajweave.contexts.weaving.diagnostics import (
    DiagnosticCollector,
    DiagnosticMessage,
    Severity,
    SourceLocation,
)
from ajweave.contexts.weaving.exceptions import (
    CompilationFailed,
    InvocationError,
    StagingIOError,
    WeaveError,
)
from ajweave.contexts.weaving.task import TaskState, WeaveResult, WeaveTask, weave

__all__ = [
    "CompilationFailed",
    "DiagnosticCollector",
    "DiagnosticMessage",
    "InvocationError",
    "Severity",
    "SourceLocation",
    "StagingIOError",
    "TaskState",
    "WeaveConfig",
    "WeaveError",
    "WeaveResult",
    "WeaveTask",
    "load_weave_config",
    "weave",
]
