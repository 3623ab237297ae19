"""
Export Sinks

DESIGN DECISION: Abstract interface for where documents end up.

The pipeline produces text; a sink persists it. Swapping the directory
sink for an object store or a share sheet adapter only means writing
another ExportSink.
"""

import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Union

import structlog

from finance_engine.exceptions import SinkError

logger = structlog.get_logger(__name__)


class ExportSink(ABC):
    """Abstract interface for export destinations."""

    @abstractmethod
    def write(self, file_name: str, content: str) -> str:
        """
        Persist one export document.

        Args:
            file_name: Bare file name, e.g. "Finance_Loans_2025-01-31.csv"
            content: Document text

        Returns:
            Location of the written document

        Raises:
            SinkError: If the document could not be written
        """
        pass


class DirectorySink(ExportSink):
    """
    Writes documents into a local directory.

    Each write goes to a temporary file in the target directory first
    and is then renamed over the final name, so readers never observe a
    half-written export. An existing file with the same name is replaced.
    """

    def __init__(self, directory: Union[str, Path], create: bool = True):
        self._directory = Path(directory)
        self._create = create

    @property
    def directory(self) -> Path:
        return self._directory

    def write(self, file_name: str, content: str) -> str:
        if not file_name or Path(file_name).name != file_name:
            raise SinkError(f"Invalid export file name: {file_name!r}")

        target = self._directory / file_name
        tmp_path = None
        try:
            if self._create:
                self._directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                dir=self._directory,
                prefix=".export-",
                suffix=".tmp",
            )
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
                handle.write(content)
            os.chmod(tmp_path, 0o644)
            os.replace(tmp_path, target)
        except OSError as exc:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            logger.warning("export_sink_write_failed", path=str(target), error=str(exc))
            raise SinkError(f"Could not write {target}: {exc}") from exc

        logger.debug("export_sink_written", path=str(target), size=len(content))
        return str(target)
