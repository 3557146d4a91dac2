"""Markdown report assembly and persistence."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

logger = logging.getLogger(__name__)

REPORT_TITLE = "Log Analysis Report"
DEFAULT_SUMMARY = "Log analysis completed successfully."
FILE_NAME_FORMAT = "Report_%Y-%m-%d_%H%M%S.md"


def reports_folder_exists(reports_dir: Path | str) -> bool:
    return Path(reports_dir).is_dir()


def generate_report_file_name(now: Optional[datetime] = None) -> str:
    return (now or datetime.now()).strftime(FILE_NAME_FORMAT)


def format_section(header_text: str, content: str, header_level: int = 2) -> str:
    return f"{'#' * header_level} {header_text}\n\n{content}\n"


def _format_file_list(names: Sequence[str]) -> str:
    if not names:
        return "- None"
    return "\n".join(f"- {name}" for name in names)


def build_report(
    analysis_text: str,
    log_file_names: Sequence[str],
    summary: str = DEFAULT_SUMMARY,
    generated: Optional[datetime] = None,
) -> str:
    """Render the full markdown report."""

    timestamp = (generated or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")
    parts = [
        f"# {REPORT_TITLE}\n",
        f"**Generated:** {timestamp}\n",
        format_section("Summary", summary),
        format_section("Log Sources Analyzed", _format_file_list(log_file_names)),
        format_section("Detailed Analysis", analysis_text.strip()),
    ]
    return "\n".join(parts)


def _unique_target(folder: Path, file_name: str) -> Path:
    target = folder / file_name
    counter = 2
    while target.exists():
        target = folder / f"{Path(file_name).stem}_{counter}{Path(file_name).suffix}"
        counter += 1
    return target


def save_report(
    content: str,
    reports_dir: Path | str,
    file_name: Optional[str] = None,
) -> Optional[Path]:
    """Write *content* into *reports_dir* and return the new file's path.

    Existing reports are never overwritten; a ``_2``, ``_3``... suffix is
    appended when the name is already taken.
    """

    folder = Path(reports_dir)
    try:
        folder.mkdir(parents=True, exist_ok=True)
        target = _unique_target(folder, file_name or generate_report_file_name())
    except OSError as exc:
        logger.error("Could not prepare reports folder %s: %s", folder, exc)
        return None

    created = False
    try:
        # Exclusive create: an existing report is never replaced.
        with target.open("x", encoding="utf-8") as handle:
            created = True
            handle.write(content)
    except (OSError, UnicodeEncodeError) as exc:
        logger.error("Could not save report %s: %s", target, exc)
        if created:
            # A failed save leaves no partial report behind.
            target.unlink(missing_ok=True)
        return None

    logger.info("Report written to %s", target)
    return target
