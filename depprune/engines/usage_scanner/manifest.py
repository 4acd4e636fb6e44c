"""Reader for the project's package.json manifest."""

from __future__ import annotations

import json
from pathlib import Path

import structlog

from depprune.engines.usage_scanner.models import PackageManifest
from depprune.exceptions import ManifestParseError, ManifestReadError

log = structlog.get_logger("depprune.engine")

_SECTIONS = {
    "scripts": "scripts",
    "dependencies": "dependencies",
    "devDependencies": "dev_dependencies",
}


def parse_manifest(file_path: Path, content: str) -> PackageManifest:
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ManifestParseError(f"{file_path}: invalid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise ManifestParseError(f"{file_path}: top level must be a JSON object")

    manifest = PackageManifest(path=file_path)
    for key, attr in _SECTIONS.items():
        section = data.get(key)
        if section is None:
            continue
        if not isinstance(section, dict):
            raise ManifestParseError(f"{file_path}: '{key}' must be a JSON object")
        # Non-string entries carry nothing to match against
        setattr(manifest, attr, {k: v for k, v in section.items() if isinstance(v, str)})
    return manifest


def read_manifest(path: Path) -> PackageManifest:
    """Read and parse the manifest at *path*.

    Raises ``ManifestReadError`` if the file cannot be read and
    ``ManifestParseError`` if it is not a well-formed package.json.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ManifestReadError(f"cannot read manifest {path}: {exc}") from exc

    manifest = parse_manifest(path, content)
    log.info(
        "manifest.read",
        path=str(path),
        dependencies=len(manifest.dependencies),
        dev_dependencies=len(manifest.dev_dependencies),
        scripts=len(manifest.scripts),
    )
    return manifest
