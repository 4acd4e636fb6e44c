"""UsageTable — declared dependency name -> referenced flag, thread-safe."""

from __future__ import annotations

import threading
from collections.abc import Iterable


class UsageTable:
    """Shared record of which declared dependencies were seen referenced.

    Keys are fixed by :meth:`initialize`; :meth:`mark_used` only ever flips
    an existing entry from False to True. Writers may run concurrently from
    any number of threads. :meth:`snapshot_unused` must only be called once
    every writer has finished.
    """

    def __init__(self) -> None:
        self._used: dict[str, bool] = {}
        self._lock = threading.Lock()

    def initialize(self, names: Iterable[str]) -> None:
        with self._lock:
            self._used = {name: False for name in names}

    def mark_used(self, name: str) -> bool:
        """Mark *name* as referenced. Unknown names are ignored.

        Returns True when *name* is a declared dependency.
        """
        with self._lock:
            if name not in self._used:
                return False
            self._used[name] = True
            return True

    def snapshot_unused(self) -> set[str]:
        return {name for name, used in self._used.items() if not used}

    def snapshot_used(self) -> set[str]:
        return {name for name, used in self._used.items() if used}

    def __contains__(self, name: object) -> bool:
        return name in self._used

    def __len__(self) -> int:
        return len(self._used)
