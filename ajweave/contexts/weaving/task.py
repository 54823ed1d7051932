"""
Weaving task orchestration.

Sequences one ajc run: build arguments, invoke the compiler, publish the
staged output, report diagnostics and decide pass/fail. Runtime failures are
raised as WeaveError subclasses and end the run.
"""

import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from ajweave.contexts.weaving.arguments import build_arguments, join_paths
from ajweave.contexts.weaving.config import WeaveConfig
from ajweave.contexts.weaving.diagnostics import DiagnosticCollector, Severity
from ajweave.contexts.weaving.exceptions import CompilationFailed, InvocationError, StagingIOError
from ajweave.contexts.weaving.invoker import CompilerInvoker, CompilerRunner
from ajweave.contexts.weaving.logger import LoguruSink, ReportSink
from ajweave.contexts.weaving.staging import StagingDirectory

FAILURE_MESSAGE = (
    "ajc failed, see messages above. Re-run with --verbose to get more detailed output."
)
LOGGED_FAILURE_MESSAGE = "ajc failed, see {log_path} for the ajc log messages."


class TaskState(Enum):
    INIT = "init"
    ARGS_BUILT = "args_built"
    INVOKED = "invoked"
    PUBLISHED = "published"
    REPORTED = "reported"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class WeaveResult:
    """
    Outcome of a weaving run.

    Attributes:
        success: No error-or-greater diagnostics were recorded
        files_processed: Number of class files ajc produced
        woven: Number of weave-info messages (advised join points)
        errors: Number of error-or-greater messages
        warnings: Number of warning messages
        output_dir: Directory the woven classes were published to
        log_path: ajc log file (only when write_to_log was set)
        messages: The closed diagnostic collector of the run
    """

    success: bool
    files_processed: int
    woven: int
    errors: int
    warnings: int
    output_dir: Path
    log_path: Optional[Path] = None
    messages: Optional[DiagnosticCollector] = None

    @property
    def summary(self) -> str:
        return (
            f"ajc result: {self.files_processed} file(s) processed, "
            f"{self.woven} pointcut(s) woven, {self.errors} error(s), "
            f"{self.warnings} warning(s)"
        )


class WeaveTask:
    """
    One ajc invocation over a fixed configuration.

    A task runs once; create a new task for the next invocation.

    Attributes:
        config: Run configuration
        state: Current TaskState
        sink: Report sink (defaults to loguru)
    """

    def __init__(
        self,
        config: WeaveConfig,
        sink: Optional[ReportSink] = None,
        runner: Optional[CompilerRunner] = None,
    ):
        self.config = config
        self.sink = sink or LoguruSink()
        self.runner = runner or CompilerInvoker(config.compiler, report=self.sink)
        self.staging = StagingDirectory(config.build_dir, sink=self.sink)
        self.state = TaskState.INIT

    def run(self) -> WeaveResult:
        """
        Execute the task.

        Returns:
            WeaveResult of a successful run

        Raises:
            InvocationError: ajc could not be run
            StagingIOError: Staging could not be prepared, published or cleaned
            CompilationFailed: ajc reported at least one error
            ValueError: The configuration names no output or class directory
        """
        if self.state is not TaskState.INIT:
            raise RuntimeError(f"WeaveTask already ran (state: {self.state.value})")

        collector = DiagnosticCollector()
        try:
            with tempfile.TemporaryDirectory(prefix="aspects") as source_root:
                return self._run(collector, Path(source_root))
        except Exception:
            self.state = TaskState.FAILED
            raise
        finally:
            collector.close()

    def _run(self, collector: DiagnosticCollector, source_root: Path) -> WeaveResult:
        config = self.config
        output_dir = config.resolve_output_dir()

        self.sink.record("INFO", "=" * 30)
        self.sink.record("INFO", "=" * 30)
        classpath = join_paths(config.existing_classpath())
        self.sink.record("INFO", f"Running ajc on classpath: {classpath}")

        staging_dir = self.staging.prepare()
        stale = self.staging.files()
        if stale:
            self.sink.record(
                "WARNING",
                f"Dropping {len(stale)} stale file(s) left in {staging_dir} by an earlier run",
            )
            self.staging.discard()
        args = build_arguments(config, staging_dir, source_root, config.log_path)
        self.sink.record("DEBUG", "About to run ajc with parameters: \n" + "\t\n".join(args))
        self.state = TaskState.ARGS_BUILT

        try:
            self.runner(args, collector)
        except InvocationError:
            self._discard_after_failure()
            raise
        except Exception as e:
            self._discard_after_failure()
            raise InvocationError("Error running ajc", e) from e
        self.state = TaskState.INVOKED

        files_processed = len(self.staging.files())
        failed = collector.has_any(Severity.ERROR, or_greater=True)
        if failed:
            # Leave the output directory untouched
            self.sink.record("INFO", "ajc reported errors, discarding staged output")
            self.staging.discard()
        else:
            self.sink.record("INFO", "ajc completed, publishing staged output")
            self.staging.publish(output_dir)
        self.state = TaskState.PUBLISHED

        result = WeaveResult(
            success=not failed,
            files_processed=files_processed,
            woven=collector.count(Severity.WEAVEINFO),
            errors=collector.count(Severity.ERROR, or_greater=True),
            warnings=collector.count(Severity.WARNING),
            output_dir=output_dir,
            log_path=config.log_path if config.write_to_log else None,
            messages=collector,
        )
        self._report(result, collector)
        self.state = TaskState.REPORTED

        if failed:
            if config.write_to_log:
                raise CompilationFailed(LOGGED_FAILURE_MESSAGE.format(log_path=result.log_path), result)
            raise CompilationFailed(FAILURE_MESSAGE, result)

        self.state = TaskState.SUCCESS
        return result

    def _discard_after_failure(self) -> None:
        # The invocation error stays the one that is raised
        try:
            self.staging.discard()
        except StagingIOError as e:
            self.sink.record("WARNING", f"Could not clean staging folder after failed run: {e}")

    def _report(self, result: WeaveResult, collector: DiagnosticCollector) -> None:
        if self.config.write_to_log:
            self.sink.record("INFO", f"See {result.log_path} for the ajc log messages")
            return

        self.sink.record("INFO", result.summary)
        self._report_if_any(collector, "ERROR", Severity.ERROR, or_greater=True)
        self._report_if_any(collector, "WARNING", Severity.WARNING, or_greater=False)

    def _report_if_any(
        self, collector: DiagnosticCollector, level: str, severity: Severity, or_greater: bool
    ) -> None:
        messages = collector.messages_of(severity, or_greater)
        if messages:
            body = "\n * ".join(str(m) for m in messages)
            self.sink.record(level, f"\n{level}:\n * {body}")


def weave(
    config: WeaveConfig,
    sink: Optional[ReportSink] = None,
    runner: Optional[CompilerRunner] = None,
) -> WeaveResult:
    """Run a single WeaveTask and return its result (raises WeaveError on failure)."""
    return WeaveTask(config, sink=sink, runner=runner).run()
