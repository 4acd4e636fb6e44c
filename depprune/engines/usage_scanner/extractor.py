"""Reference extractor — pull module names out of require/import lines.

Both rules are textual and line-local:

* ``require("name");``: split on the literal ``require("``; fragments that
  start with ``.`` are local files and are skipped. Single quotes, trailing
  comments and multi-line calls are not recognised.
* ``import ... from "name"`` / ``import "name"``: either quote style, every
  match on the line counts. Only applied to lines containing ``import``.
"""

from __future__ import annotations

import re

import structlog

from depprune.engines.usage_scanner.usage_table import UsageTable

log = structlog.get_logger("depprune.engine")

_REQUIRE_TOKEN = 'require("'
_REQUIRE_SUFFIX = '");'

_IMPORT_RE = re.compile(r"""from\s*["']([^"']+)["']|import\s*["']([^"']+)["']""")


def extract_require_names(line: str) -> list[str]:
    if _REQUIRE_TOKEN not in line:
        return []
    names: list[str] = []
    # First fragment is whatever precedes the first require call
    for fragment in line.split(_REQUIRE_TOKEN)[1:]:
        if fragment.startswith("."):
            continue
        names.append(fragment.removesuffix(_REQUIRE_SUFFIX))
    return names


def extract_import_names(line: str) -> list[str]:
    if "import" not in line:
        return []
    return [m.group(1) or m.group(2) for m in _IMPORT_RE.finditer(line)]


def extract_references(line: str) -> list[str]:
    """Return every module name referenced on *line*, in match order."""
    return extract_require_names(line) + extract_import_names(line)


def scan_line(line: str, table: UsageTable) -> None:
    """Mark every module referenced on *line* as used in *table*."""
    for name in extract_references(line):
        if table.mark_used(name):
            log.debug("scan.reference_found", package=name)
