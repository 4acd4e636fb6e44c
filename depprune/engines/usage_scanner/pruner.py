"""Pruner — rewrite package.json without the unused dependency lines.

The rewrite is textual, not structural:

1. copy the manifest line by line to a sibling temp file, dropping every
   line that contains a removed name;
2. repair ``,<whitespace>}`` left behind when the last entry of an object
   was dropped;
3. move the original to the backup name and the temp file into place.

A removed name that is a substring of an unrelated line drops that line
too (``react`` takes ``react-router`` with it). Declarations are one per
line, so this is only a problem for overlapping names.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from pathlib import Path

import structlog

from depprune.engines.usage_scanner.config import BACKUP_NAME, TEMP_NAME
from depprune.exceptions import PruneError

log = structlog.get_logger("depprune.engine")

_TRAILING_COMMA_RE = re.compile(r",\s*}")


def filter_lines(lines: Iterable[str], removal_set: Iterable[str]) -> Iterator[str]:
    """Yield the lines that contain none of the names in *removal_set*."""
    names = list(removal_set)
    for line in lines:
        if any(name in line for name in names):
            log.debug("prune.line_dropped", line=line.rstrip("\r\n"))
            continue
        yield line


def remove_trailing_commas(text: str) -> str:
    """Replace every ``,<whitespace>}`` with ``}``. A no-op on valid JSON."""
    return _TRAILING_COMMA_RE.sub("}", text)


def _write_filtered_copy(manifest_path: Path, temp_path: Path, removal_set: set[str]) -> None:
    # newline="" keeps each kept line's ending byte for byte
    with open(manifest_path, encoding="utf-8", newline="") as src, open(
        temp_path, "w", encoding="utf-8", newline=""
    ) as dst:
        dst.writelines(filter_lines(src, removal_set))


def _repair_trailing_commas(temp_path: Path) -> None:
    with open(temp_path, encoding="utf-8", newline="") as f:
        text = f.read()
    with open(temp_path, "w", encoding="utf-8", newline="") as f:
        f.write(remove_trailing_commas(text))


def prune(manifest_path: Path, removal_set: set[str]) -> Path:
    """Rewrite *manifest_path* without the lines naming *removal_set*.

    Returns the path of the backup holding the original manifest.

    Raises ``PruneError`` on any I/O failure. The manifest is never left
    missing: a failure before the swap discards the temp file, and a failed
    final rename moves the backup back into place.
    """
    temp_path = manifest_path.with_name(TEMP_NAME)
    backup_path = manifest_path.with_name(BACKUP_NAME)

    try:
        _write_filtered_copy(manifest_path, temp_path, removal_set)
        _repair_trailing_commas(temp_path)
    except (OSError, UnicodeDecodeError) as exc:
        temp_path.unlink(missing_ok=True)
        raise PruneError(manifest_path, str(exc)) from exc

    try:
        manifest_path.replace(backup_path)
    except OSError as exc:
        temp_path.unlink(missing_ok=True)
        raise PruneError(manifest_path, f"backup rename failed: {exc}") from exc

    try:
        temp_path.replace(manifest_path)
    except OSError as exc:
        # Put the original back so the manifest path is never empty
        try:
            backup_path.replace(manifest_path)
        except OSError:
            log.error("prune.restore_failed", backup=str(backup_path))
        temp_path.unlink(missing_ok=True)
        raise PruneError(manifest_path, f"swap rename failed: {exc}") from exc

    for name in sorted(removal_set):
        log.info("prune.removed", package=name)
    log.info("prune.finished", manifest=str(manifest_path), backup=str(backup_path))
    return backup_path
