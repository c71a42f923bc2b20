# hlsl_assets/watcher.py
from __future__ import annotations

import threading
from typing import List

from hlsl_assets.log import logger
from hlsl_assets.server import AssetServer


class SourceWatcher:
    """
    Polls modification times of every path the server has loaded and
    re-issues the loads whose file no longer matches what the load read.

    A registered .hlsl source recompiles on change. A .spv read before its
    compile finished (missing or stale) is reloaded by the next poll.
    """

    def __init__(self, server: AssetServer) -> None:
        self.server = server

    def poll(self) -> List[str]:
        """Reload changed paths. Returns the paths that were reloaded."""
        changed = [
            path
            for path, seen in sorted(self.server.settled_mtimes().items())
            if self.server.mtime(path) != seen
        ]

        for path in changed:
            logger.debug(f"Detected change in {path}")
            self.server.reload(path)
        return changed

    def run(self, interval: float, stop: threading.Event) -> None:
        while not stop.is_set():
            self.poll()
            self.server.update()
            stop.wait(interval)
