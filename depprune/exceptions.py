"""Custom exceptions for depprune."""

from __future__ import annotations

from pathlib import Path


class DepPruneError(Exception):
    """Base exception for all depprune errors."""


class ManifestError(DepPruneError):
    """Base for errors raised while loading the manifest."""


class ManifestReadError(ManifestError):
    """Raised when the manifest file cannot be opened or read."""


class ManifestParseError(ManifestError):
    """Raised when the manifest is not valid JSON or has the wrong shape."""


class SourceReadError(DepPruneError):
    """Raised when a file in the scanned tree cannot be opened or read."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(f"cannot read source file {path}: {reason}")


class PruneError(DepPruneError):
    """Raised when rewriting the manifest fails (temp file, write or rename)."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        super().__init__(f"cannot rewrite manifest at {path}: {reason}")
