"""End-to-end tests for UsageScanRunner on throwaway projects."""

from __future__ import annotations

import json

import pytest

from depprune.engines.usage_scanner.runner import RunContext, UsageScanRunner
from depprune.exceptions import ManifestParseError, ManifestReadError, SourceReadError


async def _run(root, **kwargs):
    return await UsageScanRunner(RunContext.for_project(root)).run(**kwargs)


@pytest.mark.asyncio
async def test_unused_dependency_is_removed(make_project):
    root = make_project(
        dependencies={"lodash": "^4", "chalk": "^5"},
        files={"index.js": 'const _ = require("lodash");\n'},
    )

    result = await _run(root)

    assert result.removed == ["chalk"]
    assert result.kept == ["lodash"]
    assert result.files_scanned == 1
    data = json.loads((root / "package.json").read_text())
    assert data["dependencies"] == {"lodash": "^4"}
    assert "chalk" in (root / "oldpackage.json").read_text()
    assert result.backup_path == root / "oldpackage.json"


@pytest.mark.asyncio
async def test_script_reference_is_never_removed(make_project):
    root = make_project(
        scripts={"build": "chalk-cli build"},
        dependencies={"chalk": "^5"},
        files={"index.js": "console.log('hi');\n"},
    )

    result = await _run(root)

    assert result.removed == []
    assert result.always_keep == ["chalk"]
    assert json.loads((root / "package.json").read_text())["dependencies"] == {"chalk": "^5"}


@pytest.mark.asyncio
async def test_import_and_local_require_in_same_file(make_project):
    root = make_project(
        dependencies={"bar": "^1", "localfile": "^1"},
        files={
            "src/app.js": (
                "import Foo from 'bar'\n"
                'const x = require("./localfile");\n'
            )
        },
    )

    result = await _run(root, dry_run=True)

    assert result.kept == ["bar"]
    assert result.removed == ["localfile"]


@pytest.mark.asyncio
async def test_dev_dependencies_considered(make_project):
    root = make_project(
        dependencies={"express": "^4"},
        dev_dependencies={"jest": "^29", "eslint": "^8"},
        scripts={"test": "jest --coverage"},
        files={"server.js": 'const express = require("express");\n'},
    )

    result = await _run(root)

    assert result.removed == ["eslint"]
    data = json.loads((root / "package.json").read_text())
    assert data["devDependencies"] == {"jest": "^29"}
    assert data["dependencies"] == {"express": "^4"}
    assert data["name"] == "fixture-app"


@pytest.mark.asyncio
async def test_references_under_excluded_directory_do_not_count(make_project):
    root = make_project(
        dependencies={"chalk": "^5", "express": "^4"},
        files={
            "node_modules/express/index.js": 'const chalk = require("chalk");\n',
            "server.js": 'const express = require("express");\n',
        },
    )

    result = await _run(root)

    assert result.removed == ["chalk"]
    assert result.files_scanned == 1


@pytest.mark.asyncio
async def test_dry_run_leaves_manifest_alone(make_project):
    root = make_project(dependencies={"chalk": "^5"})
    before = (root / "package.json").read_text()

    result = await _run(root, dry_run=True)

    assert result.removed == ["chalk"]
    assert result.backup_path is None
    assert (root / "package.json").read_text() == before
    assert not (root / "oldpackage.json").exists()


@pytest.mark.asyncio
async def test_missing_manifest_aborts_before_scanning(tmp_path):
    (tmp_path / "index.js").write_text('require("lodash");\n')
    with pytest.raises(ManifestReadError):
        await _run(tmp_path)


@pytest.mark.asyncio
async def test_invalid_manifest_aborts(tmp_path):
    (tmp_path / "package.json").write_text("{ not json")
    with pytest.raises(ManifestParseError):
        await _run(tmp_path)
    assert not (tmp_path / "oldpackage.json").exists()


@pytest.mark.asyncio
async def test_unreadable_source_aborts_without_rewrite(make_project):
    root = make_project(dependencies={"chalk": "^5"})
    # Dangling symlink: listed as a file, fails to open
    (root / "broken.js").symlink_to(root / "does-not-exist.js")
    before = (root / "package.json").read_text()

    with pytest.raises(SourceReadError):
        await _run(root)

    assert (root / "package.json").read_text() == before
    assert not (root / "oldpackage.json").exists()


@pytest.mark.asyncio
async def test_each_run_gets_a_fresh_table(make_project):
    root = make_project(
        dependencies={"lodash": "^4"},
        files={"index.js": 'const _ = require("lodash");\n'},
    )
    first = RunContext.for_project(root)
    second = RunContext.for_project(root)
    assert first.table is not second.table

    result = await UsageScanRunner(first).run(dry_run=True)
    assert result.removed == []
    assert len(second.table) == 0
