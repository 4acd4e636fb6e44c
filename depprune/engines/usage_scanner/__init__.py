"""Usage scanner engine — find declared dependencies nothing references."""

from depprune.engines.usage_scanner.models import PackageManifest, PruneResult
from depprune.engines.usage_scanner.runner import RunContext, UsageScanRunner
from depprune.engines.usage_scanner.usage_table import UsageTable

__all__ = ["PackageManifest", "PruneResult", "RunContext", "UsageScanRunner", "UsageTable"]
