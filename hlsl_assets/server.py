# hlsl_assets/server.py
from __future__ import annotations

import json
import threading
from concurrent import futures
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from queue import Queue
from typing import Any, Dict, List, Mapping, Optional, Tuple

from hlsl_assets.errors import AssetLoadError
from hlsl_assets.handle import AssetHandle, AssetId, make_asset_id
from hlsl_assets.importers.base import AssetImporter, LoadContext
from hlsl_assets.log import logger
from hlsl_assets.store import AssetStore, LoadState


def _settings_key(settings: Any) -> str:
    if settings is None:
        return ""
    if isinstance(settings, Mapping):
        return json.dumps(dict(settings), sort_keys=True, separators=(",", ":"))
    return settings.key()


def _stat_mtime(path: Path) -> Optional[float]:
    try:
        return path.stat().st_mtime
    except FileNotFoundError:
        return None


class AssetServer:
    """
    Loads assets on a background pool and hands results back on update().

    Importers may block (the .hlsl importer waits on the compiler), so they
    only ever run on the AssetWorker threads.
    """

    def __init__(self, asset_root: Path, max_workers: int = 2) -> None:
        self.root = Path(asset_root)
        self.store = AssetStore()

        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="AssetWorker"
        )
        self._loaded_queue: Queue[Tuple[AssetId, Any, Optional[BaseException]]] = (
            Queue()
        )

        # (path, settings key) -> handle
        self._handles: Dict[Tuple[str, str], AssetHandle] = {}
        self._settings: Dict[AssetId, Any] = {}
        self._importers: Dict[str, AssetImporter] = {}
        self._pending: List[Future] = []

        # path -> mtime the latest load saw, and loads still running per path
        self._lock = threading.Lock()
        self._load_mtimes: Dict[str, Optional[float]] = {}
        self._in_flight: Dict[str, int] = {}

    def register_importer(self, importer: AssetImporter) -> None:
        for ext in importer.extensions:
            self._importers[ext.lower()] = importer

    def load(self, path: str | Path, settings: Any = None) -> AssetHandle:
        """
        Non-blocking load request. Return handle instantly.
        Loading the same path with different settings gives a distinct handle.
        """
        path = Path(path).as_posix()
        key = (path, _settings_key(settings))
        if key in self._handles:
            return self._handles[key]

        handle: AssetHandle = AssetHandle(make_asset_id(*key), path, key[1])
        self._handles[key] = handle
        self._settings[handle.id] = settings

        self._submit(handle)
        return handle

    def reload(self, path: str | Path) -> List[AssetHandle]:
        """Re-issue every load made for `path`, whatever its settings."""
        path = Path(path).as_posix()
        handles = [h for (p, _), h in self._handles.items() if p == path]
        for handle in handles:
            logger.info(f"Reloading {handle.path}")
            self._submit(handle)
        return handles

    def _submit(self, handle: AssetHandle) -> None:
        self.store.mark_loading(handle.id)
        with self._lock:
            self._in_flight[handle.path] = self._in_flight.get(handle.path, 0) + 1
        try:
            future = self._executor.submit(
                self._worker_load, handle.id, handle.path, self._settings[handle.id]
            )
        except RuntimeError:
            self._finish(handle.path)
            raise
        self._pending = [f for f in self._pending if not f.done()]
        self._pending.append(future)

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until every submitted load finished. False on timeout."""
        _, not_done = futures.wait(list(self._pending), timeout=timeout)
        self._pending = list(not_done)
        return not not_done

    def _worker_load(self, asset_id: AssetId, path: str, settings: Any) -> None:
        """
        Load asset on background thread.
        """
        ctx = LoadContext(self.root, path)
        with self._lock:
            self._load_mtimes[path] = _stat_mtime(ctx.full_path)
        try:
            ext = ctx.full_path.suffix.lower()
            importer = self._importers.get(ext)
            if not importer:
                raise AssetLoadError(f"No importer for {ext}")

            data = importer.import_file(ctx, settings)
            self._loaded_queue.put((asset_id, data, None))
        except Exception as e:
            logger.error(f"Failed to load {ctx.full_path}: {e}")
            self._loaded_queue.put((asset_id, None, e))
        finally:
            self._finish(path)

    def _finish(self, path: str) -> None:
        with self._lock:
            self._in_flight[path] -= 1
            if not self._in_flight[path]:
                del self._in_flight[path]

    def update(self) -> List[AssetId]:
        """
        Called on the Main Thread every frame.
        Return list of newly loaded AssetIds.
        """
        loaded_ids = []
        while not self._loaded_queue.empty():
            asset_id, data, error = self._loaded_queue.get()
            if error is not None:
                self.store.fail(asset_id, error)
                continue
            self.store.store(asset_id, data)
            loaded_ids.append(asset_id)

        return loaded_ids

    def get(self, handle: AssetHandle) -> Optional[Any]:
        return self.store.get(handle.id)

    def state(self, handle: AssetHandle) -> LoadState:
        return self.store.state(handle.id)

    def error(self, handle: AssetHandle) -> Optional[BaseException]:
        return self.store.error(handle.id)

    def paths(self) -> List[str]:
        """Every asset path a load has been issued for."""
        return sorted({p for p, _ in self._handles})

    def mtime(self, path: str) -> Optional[float]:
        return _stat_mtime(self.root / path)

    def settled_mtimes(self) -> Dict[str, Optional[float]]:
        """
        For every path with no load running, the mtime its latest load saw
        (None when the file was missing).
        """
        with self._lock:
            return {
                p: m for p, m in self._load_mtimes.items() if p not in self._in_flight
            }

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> AssetServer:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.shutdown()
