# SPDX-FileCopyrightText: 2025 OmniNode.ai Inc.
# SPDX-License-Identifier: MIT

"""
ArtifactWriter: persist an ArtifactSet with rollback.

Writes go through a temporary file and rename. Files and directories created
during a failing run are removed again; pre-existing files that were
overwritten are not restored.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Generator
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path

from grpcwizard.errors import ArtifactWriteError
from grpcwizard.models import ArtifactSet

logger = logging.getLogger(__name__)


@dataclass
class ArtifactWriteResult:
    """Outcome of a successful write."""

    output_path: str
    files_written: list[str] = field(default_factory=list)
    directories_created: list[str] = field(default_factory=list)
    total_bytes: int = 0


class ArtifactWriter:
    """Artifact writer with rollback support.

    Features:
    - Atomic per-file writes using temporary files
    - Automatic rollback on exception inside atomic_write_context
    - Collision detection when overwriting is disallowed
    - Write verification

    Example:
        ```python
        writer = ArtifactWriter()
        with writer.atomic_write_context():
            result = writer.write_artifacts(Path("out"), artifacts)
        ```
    """

    def __init__(self, enable_rollback: bool = True) -> None:
        self.enable_rollback = enable_rollback
        self._created_paths: list[Path] = []

    @contextmanager
    def atomic_write_context(self) -> Generator[ArtifactWriter, None, None]:
        """Roll back everything created inside the block if it raises."""
        try:
            yield self
        except Exception as e:
            if self.enable_rollback:
                logger.warning("Exception during write operation, rolling back: %s", e)
                self.rollback()
            raise
        finally:
            self._created_paths.clear()

    def write_artifacts(
        self,
        output_root: Path,
        artifacts: ArtifactSet,
        allow_overwrite: bool = True,
    ) -> ArtifactWriteResult:
        """Write every artifact under output_root at its relative path.

        Args:
            output_root: Base output directory
            artifacts: Artifacts to write
            allow_overwrite: Allow replacing existing files

        Returns:
            ArtifactWriteResult with written paths

        Raises:
            ArtifactWriteError: On validation, collision or I/O failure
        """
        if not len(artifacts):
            raise ArtifactWriteError("No artifacts provided for writing")

        root = Path(output_root).resolve()
        self._validate_output_directory(root)

        files = artifacts.as_files()
        targets = {relative: root / relative for relative in files}
        if not allow_overwrite:
            self._check_file_collisions(list(targets.values()))

        result = ArtifactWriteResult(output_path=str(root))
        for relative, content in files.items():
            path = targets[relative]
            self._ensure_parent(path, root, result)

            existed = path.exists()
            self._write_file(path, content)
            if not existed:
                self._created_paths.append(path)

            if not self._verify_write(path, content):
                raise ArtifactWriteError(f"Write verification failed for {relative}", path)

            size = len(content.encode("utf-8"))
            result.files_written.append(relative)
            result.total_bytes += size
            logger.debug("Wrote file: %s (%d bytes)", path, size)

        logger.info(
            "Wrote %d file(s), %d bytes under %s",
            len(result.files_written),
            result.total_bytes,
            root,
        )
        return result

    def rollback(self) -> None:
        """Delete created files, then created directories if empty."""
        if not self._created_paths:
            logger.debug("No paths to rollback")
            return

        logger.info("Rolling back %d path(s)", len(self._created_paths))
        for path in reversed(self._created_paths):
            try:
                if path.is_file():
                    path.unlink()
                    logger.debug("Deleted file: %s", path)
                elif path.is_dir():
                    if any(path.iterdir()):
                        logger.warning("Directory not empty, skipping: %s", path)
                    else:
                        path.rmdir()
                        logger.debug("Deleted empty directory: %s", path)
            except OSError as e:
                logger.warning("Failed to delete %s during rollback: %s", path, e)
        logger.info("Rollback complete")

    # -----------------------------------------------------------------------
    # Helpers
    # -----------------------------------------------------------------------

    def _create_directories(self, directory: Path) -> list[Path]:
        """Create directory and any missing ancestors, tracking each for rollback."""
        missing: list[Path] = []
        current = directory
        while not current.exists():
            missing.append(current)
            current = current.parent
        for created in reversed(missing):
            try:
                created.mkdir()
            except OSError as e:
                raise ArtifactWriteError(f"Cannot create directory: {created}", created) from e
            self._created_paths.append(created)
            logger.debug("Created directory: %s", created)
        return list(reversed(missing))

    def _ensure_parent(self, path: Path, root: Path, result: ArtifactWriteResult) -> None:
        for directory in self._create_directories(path.parent):
            result.directories_created.append(str(directory.relative_to(root)))

    def _validate_output_directory(self, path: Path) -> None:
        if not path.exists():
            self._create_directories(path)
            logger.debug("Created output directory: %s", path)

        if not path.is_dir():
            raise ArtifactWriteError(f"Output path is not a directory: {path}", path)
        if not os.access(path, os.W_OK):
            raise ArtifactWriteError(f"Output directory is not writable: {path}", path)

    def _check_file_collisions(self, paths: list[Path]) -> None:
        existing = [path for path in paths if path.exists()]
        if existing:
            raise ArtifactWriteError(
                f"File collision detected: {len(existing)} file(s) already exist "
                f"(first: {existing[0]})",
                existing[0],
            )

    def _write_file(self, path: Path, content: str) -> None:
        temp_path = path.with_suffix(path.suffix + ".tmp")
        try:
            temp_path.write_text(content, encoding="utf-8")
            temp_path.replace(path)
        except OSError as e:
            temp_path.unlink(missing_ok=True)
            raise ArtifactWriteError(f"Failed to write file: {path}", path) from e

    def _verify_write(self, path: Path, expected_content: str) -> bool:
        try:
            actual_content = path.read_text(encoding="utf-8")
        except OSError as e:
            logger.error("Failed to verify write for %s: %s", path, e)
            return False
        if actual_content != expected_content:
            logger.error(
                "Content mismatch for %s: expected %d chars, got %d",
                path,
                len(expected_content),
                len(actual_content),
            )
            return False
        return True
