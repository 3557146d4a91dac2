"""Discover, read and combine the log files handed to the model."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)

LOG_GLOB = "*.log"
DELIMITER = "=" * 80
LARGE_FILE_BYTES = 10 * 1024 * 1024


@dataclass
class LogFileMetadata:
    """Size and timestamp details for a single log file."""

    name: str
    size_bytes: int
    last_modified: datetime
    full_path: Path

    @property
    def size_kb(self) -> float:
        return self.size_bytes / 1024

    @property
    def size_mb(self) -> float:
        return self.size_bytes / (1024 * 1024)


@dataclass
class CombinedLogs:
    """Combined log text along with the files that made it in."""

    text: str
    files: List[LogFileMetadata] = field(default_factory=list)

    @property
    def file_names(self) -> list[str]:
        return [entry.name for entry in self.files]

    @property
    def total_size_kb(self) -> float:
        return sum(entry.size_kb for entry in self.files)


def logs_folder_exists(logs_dir: Path | str) -> bool:
    return Path(logs_dir).is_dir()


def list_log_files(logs_dir: Path | str) -> list[Path]:
    """Return the ``*.log`` files found directly inside *logs_dir*."""

    folder = Path(logs_dir)
    if not folder.is_dir():
        logger.warning("Logs folder not found: %s", folder)
        return []

    files = sorted(path for path in folder.glob(LOG_GLOB) if path.is_file())
    if not files:
        logger.warning("No %s files found in %s", LOG_GLOB, folder)
    return files


def get_log_metadata(log_path: Path | str) -> Optional[LogFileMetadata]:
    path = Path(log_path)
    try:
        stat = path.stat()
    except OSError as exc:
        logger.warning("Could not read metadata for %s: %s", path, exc)
        return None

    return LogFileMetadata(
        name=path.name,
        size_bytes=stat.st_size,
        last_modified=datetime.fromtimestamp(stat.st_mtime),
        full_path=path.resolve(),
    )


def read_log_file(log_path: Path | str) -> Optional[str]:
    """Read *log_path* as UTF-8 text.

    Files above 10 MB are still read but trigger a warning, since very large
    inputs may exceed the model's context window.
    """

    path = Path(log_path)
    try:
        size = path.stat().st_size
        if size > LARGE_FILE_BYTES:
            logger.warning(
                "%s is %.1f MB; large files may exceed the model context window",
                path.name,
                size / (1024 * 1024),
            )
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        logger.error("%s is not valid UTF-8 text: %s", path, exc)
    except OSError as exc:
        logger.error("Could not read %s: %s", path, exc)
    return None


def format_log_block(metadata: LogFileMetadata, content: str) -> str:
    header = "\n".join(
        [
            DELIMITER,
            f"FILE: {metadata.name}",
            f"SIZE: {metadata.size_kb:.2f} KB",
            f"MODIFIED: {metadata.last_modified:%Y-%m-%d %H:%M:%S}",
            DELIMITER,
        ]
    )
    return f"{header}\n{content}\n\n"


def collect_logs(logs_dir: Path | str) -> Optional[CombinedLogs]:
    """Combine every readable log in *logs_dir*, skipping the ones that fail."""

    blocks: list[str] = []
    included: list[LogFileMetadata] = []

    for path in list_log_files(logs_dir):
        metadata = get_log_metadata(path)
        if metadata is None:
            logger.warning("Skipping %s: metadata unavailable", path.name)
            continue
        content = read_log_file(path)
        if content is None:
            logger.warning("Skipping %s: content unavailable", path.name)
            continue
        blocks.append(format_log_block(metadata, content))
        included.append(metadata)

    if not included:
        return None

    logger.debug("Combined %d log file(s)", len(included))
    return CombinedLogs(text="".join(blocks), files=included)


def combine_log_files(logs_dir: Path | str) -> Optional[str]:
    combined = collect_logs(logs_dir)
    return combined.text if combined else None
