"""Data models for the usage scanner engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class PackageManifest:
    """The parts of a package.json the scanner cares about."""

    path: Path
    scripts: dict[str, str] = field(default_factory=dict)
    dependencies: dict[str, str] = field(default_factory=dict)
    dev_dependencies: dict[str, str] = field(default_factory=dict)

    @property
    def declared_names(self) -> set[str]:
        return set(self.dependencies) | set(self.dev_dependencies)

    @property
    def script_references(self) -> set[str]:
        """Declared names that occur as a substring of any script command."""
        names = self.declared_names
        return {
            name
            for name in names
            for command in self.scripts.values()
            if name in command
        }


@dataclass
class PruneResult:
    """Result of a full scan + prune run."""

    manifest_path: Path
    removed: list[str]
    kept: list[str]
    always_keep: list[str]
    files_scanned: int
    backup_path: Path | None = None
    dry_run: bool = False
