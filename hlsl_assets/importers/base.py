# hlsl_assets/importers/base.py
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Tuple


@dataclass(frozen=True)
class LoadContext:
    """Where an asset lives: the server's root and the asset-relative path."""

    root: Path
    asset_path: str

    @property
    def full_path(self) -> Path:
        return self.root / self.asset_path


class AssetImporter(ABC):
    extensions: Tuple[str, ...] = ()

    @abstractmethod
    def import_file(self, ctx: LoadContext, settings: Any = None) -> Any:
        """
        Read file from disk and returns CPU-friendly data object.
        Must be thread-safe.
        """
        pass
