"""UsageScanRunner — read manifest -> scan tree -> prune manifest."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import structlog

from depprune.engines.usage_scanner.config import EXCLUDED_NAMES, MANIFEST_NAME
from depprune.engines.usage_scanner.manifest import read_manifest
from depprune.engines.usage_scanner.models import PruneResult
from depprune.engines.usage_scanner.pruner import prune
from depprune.engines.usage_scanner.usage_table import UsageTable
from depprune.engines.usage_scanner.walker import scan

log = structlog.get_logger("depprune.engine")


@dataclass
class RunContext:
    """Everything one run needs, built fresh per run."""

    root: Path
    manifest_path: Path
    table: UsageTable = field(default_factory=UsageTable)
    exclude: frozenset[str] = EXCLUDED_NAMES

    @classmethod
    def for_project(cls, root: Path) -> RunContext:
        return cls(root=root, manifest_path=root / MANIFEST_NAME)


class UsageScanRunner:
    """Orchestrates the three phases for a single project."""

    def __init__(self, context: RunContext) -> None:
        self._ctx = context

    async def run(self, *, dry_run: bool = False) -> PruneResult:
        """Full pipeline: read manifest -> mark script refs -> scan -> prune.

        Any ``DepPruneError`` raised by a phase propagates unchanged; nothing
        is rewritten unless every earlier phase succeeded.
        """
        ctx = self._ctx

        manifest = read_manifest(ctx.manifest_path)
        ctx.table.initialize(manifest.declared_names)

        always_keep = manifest.script_references
        for name in always_keep:
            ctx.table.mark_used(name)
        if always_keep:
            log.info("manifest.script_references", packages=sorted(always_keep))

        files_scanned = await scan(ctx.root, ctx.table, ctx.exclude)

        # Safe to read: scan() returns only after every task joined
        removal_set = ctx.table.snapshot_unused()
        kept = ctx.table.snapshot_used()
        log.info("scan.summary", unused=sorted(removal_set), used=len(kept))

        backup_path = None
        if not dry_run:
            backup_path = prune(ctx.manifest_path, removal_set)

        return PruneResult(
            manifest_path=ctx.manifest_path,
            removed=sorted(removal_set),
            kept=sorted(kept),
            always_keep=sorted(always_keep),
            files_scanned=files_scanned,
            backup_path=backup_path,
            dry_run=dry_run,
        )
