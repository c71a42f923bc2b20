# hlsl_assets/store.py
from enum import Enum
from typing import Any, Dict, Optional

from hlsl_assets.handle import AssetId


class LoadState(str, Enum):
    NOT_LOADED = "not_loaded"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


class AssetStore:
    """
    Stores loaded asset data (CPU side) mapped by AssetId.
    A failed reload keeps the last good data around.
    """

    def __init__(self) -> None:
        self._storage: Dict[AssetId, Any] = {}
        self._states: Dict[AssetId, LoadState] = {}
        self._errors: Dict[AssetId, BaseException] = {}

    def mark_loading(self, asset_id: AssetId) -> None:
        self._states[asset_id] = LoadState.LOADING

    def store(self, asset_id: AssetId, data: Any) -> None:
        """Register a loaded asset."""
        self._storage[asset_id] = data
        self._states[asset_id] = LoadState.LOADED
        self._errors.pop(asset_id, None)

    def fail(self, asset_id: AssetId, error: BaseException) -> None:
        self._states[asset_id] = LoadState.FAILED
        self._errors[asset_id] = error

    def get(self, asset_id: AssetId) -> Optional[Any]:
        """Retrieve asset data if available."""
        return self._storage.get(asset_id)

    def state(self, asset_id: AssetId) -> LoadState:
        return self._states.get(asset_id, LoadState.NOT_LOADED)

    def error(self, asset_id: AssetId) -> Optional[BaseException]:
        return self._errors.get(asset_id)

    def __contains__(self, asset_id: AssetId) -> bool:
        return asset_id in self._storage

    def clear(self) -> None:
        """Clear all loaded assets (use with caution)."""
        self._storage.clear()
        self._states.clear()
        self._errors.clear()
