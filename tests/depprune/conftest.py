"""Shared fixtures for depprune tests — throwaway JS projects on disk."""

import json
from pathlib import Path

import pytest


@pytest.fixture
def make_project(tmp_path):
    """Factory: write a package.json plus source files under *tmp_path*.

    ``files`` maps relative paths to file contents; parent directories are
    created as needed.
    """

    def _make(
        *,
        dependencies: dict[str, str] | None = None,
        dev_dependencies: dict[str, str] | None = None,
        scripts: dict[str, str] | None = None,
        files: dict[str, str] | None = None,
    ) -> Path:
        manifest: dict = {"name": "fixture-app", "version": "1.0.0"}
        if scripts is not None:
            manifest["scripts"] = scripts
        if dependencies is not None:
            manifest["dependencies"] = dependencies
        if dev_dependencies is not None:
            manifest["devDependencies"] = dev_dependencies
        (tmp_path / "package.json").write_text(json.dumps(manifest, indent=2) + "\n")

        for rel, content in (files or {}).items():
            target = tmp_path / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content)
        return tmp_path

    return _make
