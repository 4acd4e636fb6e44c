"""CLI entry point: depprune.

Usage:
    depprune                     # scan the current directory and rewrite package.json
    depprune path/to/project     # scan another project
    depprune --dry-run           # report unused dependencies, change nothing
    depprune --json              # machine-readable report
"""

from __future__ import annotations

import asyncio
import json
import sys
from pathlib import Path

import click

from depprune.core.logging import setup_logging
from depprune.engines.usage_scanner.models import PruneResult
from depprune.engines.usage_scanner.runner import RunContext, UsageScanRunner
from depprune.exceptions import DepPruneError


def _print_result(result: PruneResult, as_json: bool) -> None:
    if as_json:
        click.echo(
            json.dumps(
                {
                    "manifest": str(result.manifest_path),
                    "removed": result.removed,
                    "kept": result.kept,
                    "always_keep": result.always_keep,
                    "files_scanned": result.files_scanned,
                    "backup": str(result.backup_path) if result.backup_path else None,
                    "dry_run": result.dry_run,
                },
                indent=2,
            )
        )
        return

    click.echo(f"Scanned {result.files_scanned} file(s)")
    if result.always_keep:
        click.echo(f"Kept (referenced by scripts): {', '.join(result.always_keep)}")

    if not result.removed:
        click.echo("No unused dependencies found.")
    else:
        verb = "Would remove" if result.dry_run else "Removed"
        click.echo(f"{verb} {len(result.removed)} package(s):")
        for name in result.removed:
            click.echo(f"  {name}")

    if result.backup_path is not None:
        click.echo(f"{result.manifest_path.name} has been rewritten.")
        click.echo(f"Refer to {result.backup_path.name} for the original file.")


@click.command()
@click.argument(
    "root",
    default=".",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.option("--dry-run", is_flag=True, help="Report unused dependencies without rewriting")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(root: Path, dry_run: bool, as_json: bool, verbose: bool) -> None:
    """Drop package.json dependencies that no source file references."""
    setup_logging("DEBUG" if verbose else None)

    runner = UsageScanRunner(RunContext.for_project(root.resolve()))
    try:
        result = asyncio.run(runner.run(dry_run=dry_run))
    except DepPruneError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    _print_result(result, as_json)


if __name__ == "__main__":
    main()
