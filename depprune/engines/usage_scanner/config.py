"""Static configuration for the usage scanner."""

from __future__ import annotations

MANIFEST_NAME = "package.json"

# Pre-run manifest, left beside the rewritten one for manual review.
BACKUP_NAME = "oldpackage.json"

# Filtered copy written before the swap.
TEMP_NAME = "newPackage.json"

# File and directory names skipped during the walk. A matching directory
# prunes its whole subtree.
EXCLUDED_NAMES: frozenset[str] = frozenset(
    {
        "node_modules",
        ".gitignore",
        ".git",
        ".env",
        MANIFEST_NAME,
        "package-lock.json",
        "README.md",
        BACKUP_NAME,
        TEMP_NAME,
    }
)
