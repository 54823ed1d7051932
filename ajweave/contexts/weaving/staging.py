"""
Staging directory management.

ajc writes into a scratch directory under the build root. Only a successful
run publishes it: the contents are merged into the output directory and the
staging directory is emptied, ready for the next invocation.
"""

import shutil
from pathlib import Path
from typing import List, Optional

from ajweave.contexts.weaving.exceptions import StagingIOError
from ajweave.contexts.weaving.logger import LoguruSink, ReportSink

STAGING_DIR_NAME = "ajc"


def files_in(directory: Path) -> List[Path]:
    """All regular files below a directory, recursively (empty if it does not exist)."""
    if not directory.exists():
        return []
    return sorted(p for p in directory.rglob("*") if p.is_file())


def _clear_directory(directory: Path) -> None:
    """Remove everything inside a directory but keep the directory itself."""
    for entry in directory.iterdir():
        if entry.is_dir() and not entry.is_symlink():
            shutil.rmtree(entry)
        else:
            entry.unlink()


class StagingDirectory:
    """
    Scratch output directory for one ajc invocation.

    Attributes:
        path: Absolute staging location (<build_dir>/ajc)
    """

    def __init__(
        self,
        build_dir: Path,
        name: str = STAGING_DIR_NAME,
        sink: Optional[ReportSink] = None,
    ):
        self.path = (Path(build_dir) / name).absolute()
        self.sink = sink or LoguruSink()

    def prepare(self) -> Path:
        """
        Create the staging directory if needed.

        Safe to call when the directory already exists.

        Returns:
            Staging directory path

        Raises:
            StagingIOError: If the directory cannot be created
        """
        if self.path.is_dir():
            return self.path
        try:
            self.path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StagingIOError("Failed to create staging folder", self.path, e) from e
        self.sink.record("INFO", f"Created staging folder {self.path}")
        return self.path

    def files(self) -> List[Path]:
        return files_in(self.path)

    def publish(self, output_dir: Path) -> List[Path]:
        """
        Copy staging contents into the output directory, then empty staging.

        Existing directories are merged and existing files overwritten. When
        the copy fails, staging is left as is so its output is not lost.

        Args:
            output_dir: Final location of the woven classes

        Returns:
            Paths of the published files, relative to output_dir

        Raises:
            StagingIOError: If copying or cleaning fails
        """
        published = [p.relative_to(self.path) for p in self.files()]

        try:
            shutil.copytree(self.path, output_dir, dirs_exist_ok=True)
        except OSError as e:
            raise StagingIOError(
                f"Failed to copy staged files to {output_dir}", self.path, e
            ) from e

        try:
            _clear_directory(self.path)
        except OSError as e:
            raise StagingIOError("Failed to clean staging folder", self.path, e) from e

        self.sink.record("DEBUG", f"Published {len(published)} file(s) to {output_dir}")
        return published

    def discard(self) -> None:
        """
        Empty staging without publishing.

        Raises:
            StagingIOError: If cleaning fails
        """
        if not self.path.is_dir():
            return
        try:
            _clear_directory(self.path)
        except OSError as e:
            raise StagingIOError("Failed to clean staging folder", self.path, e) from e
