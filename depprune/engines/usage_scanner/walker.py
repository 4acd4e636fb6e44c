"""Tree scanner — walk the project and scan every eligible file concurrently."""

from __future__ import annotations

import asyncio
import os
from collections.abc import Iterator
from pathlib import Path

import structlog

from depprune.engines.usage_scanner.config import EXCLUDED_NAMES
from depprune.engines.usage_scanner.extractor import scan_line
from depprune.engines.usage_scanner.usage_table import UsageTable
from depprune.exceptions import SourceReadError

log = structlog.get_logger("depprune.engine")


def walk(root: Path, exclude: frozenset[str] | set[str] = EXCLUDED_NAMES) -> Iterator[Path]:
    """Yield every file under *root* not excluded by name.

    An excluded directory is pruned with its whole subtree; its siblings
    are still visited. Order is unspecified.
    """
    for dirpath, dirnames, filenames in os.walk(root):
        # Pruning in place stops os.walk from descending
        dirnames[:] = [d for d in dirnames if d not in exclude]
        for filename in filenames:
            if filename in exclude:
                continue
            yield Path(dirpath) / filename


def scan_file(path: Path, table: UsageTable) -> None:
    """Stream *path* line by line through the extractor (blocking)."""
    log.debug("scan.file", path=str(path))
    try:
        # Lines end at "\n" only; a lone "\r" stays inside the line
        with open(path, encoding="utf-8", errors="replace", newline="\n") as f:
            for line in f:
                scan_line(line.removesuffix("\n").removesuffix("\r"), table)
    except OSError as exc:
        raise SourceReadError(path, str(exc)) from exc


async def scan(
    root: Path,
    table: UsageTable,
    exclude: frozenset[str] | set[str] = EXCLUDED_NAMES,
) -> int:
    """Scan every eligible file under *root* and mark references in *table*.

    One task per file, all dispatched up front; the blocking reads run in
    worker threads. Returns once every task has finished, which is the
    barrier the pruner relies on. The first ``SourceReadError`` aborts the
    scan.

    Returns the number of files scanned.
    """
    tasks = [asyncio.to_thread(scan_file, path, table) for path in walk(root, exclude)]
    log.info("scan.dispatched", root=str(root), files=len(tasks))
    await asyncio.gather(*tasks)
    log.info("scan.finished", root=str(root), files=len(tasks))
    return len(tasks)
