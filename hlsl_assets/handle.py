# hlsl_assets/handle.py
import hashlib
from dataclasses import dataclass
from typing import Generic, NewType, TypeVar

AssetId = NewType("AssetId", int)  # 64-bit integer GUID
T = TypeVar("T")  # Type of data (SourceShaderAsset, CompiledShader)


def make_asset_id(path: str, settings_key: str = "") -> AssetId:
    """Content-addressed id: same path with different settings is a different asset."""
    digest = hashlib.sha256(f"{path}\0{settings_key}".encode()).hexdigest()
    return AssetId(int(digest, 16) % (10**16))


@dataclass(frozen=True)
class AssetHandle(Generic[T]):
    """
    Lightweight reference to an asset.
    Holding this does not guarantee that the asset is loaded.
    """

    id: AssetId
    path: str
    settings_key: str = ""
