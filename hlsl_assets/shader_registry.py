# hlsl_assets/shader_registry.py
from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Optional

from hlsl_assets.compiler import output_path
from hlsl_assets.config import hot_reload_available
from hlsl_assets.handle import AssetHandle
from hlsl_assets.resources import ResourceManager
from hlsl_assets.server import AssetServer
from hlsl_assets.types import CompiledShader, CompileSettings, SourceShaderAsset


class ShaderRegistry:
    """
    Holds .hlsl source handles so the source watcher keeps reloading them,
    which regenerates the .spv whenever a source changes.

    Profiles: ps_6_0..ps_6_7, vs_6_0..vs_6_7, gs_6_0..gs_6_7, hs_6_0..hs_6_7,
    ds_6_0..ds_6_7, cs_6_0..cs_6_7, lib_6_1..lib_6_7, ms_6_5..ms_6_7,
    as_6_5..as_6_7.
    """

    def __init__(
        self, hot_reload: Optional[bool] = None, output_extension: str = "spv"
    ) -> None:
        if hot_reload is None:
            hot_reload = hot_reload_available()
        self.hot_reload = hot_reload
        self.output_extension = output_extension
        self._handles: Dict[Path, AssetHandle[SourceShaderAsset]] = {}

    def load(
        self, path: str | Path, asset_server: AssetServer, profile: str
    ) -> AssetHandle[CompiledShader]:
        """
        Compile `path` with `profile` and return a handle to the compiled
        module. Never raises; failures show up in the server's load state.
        """
        source = Path(path)
        if self.hot_reload:
            settings = CompileSettings(profile=profile)
            self._handles[source] = asset_server.load(source, settings)

        return asset_server.load(output_path(source, self.output_extension))

    @staticmethod
    def load_from_resources(
        path: str | Path, resources: ResourceManager, profile: str
    ) -> AssetHandle[CompiledShader]:
        asset_server = resources.get(AssetServer)
        registry = resources.get(ShaderRegistry)
        return registry.load(path, asset_server, profile)

    def get(self, path: str | Path) -> Optional[AssetHandle[SourceShaderAsset]]:
        return self._handles.get(Path(path))

    def paths(self) -> List[Path]:
        return list(self._handles)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, Path)):
            return False
        return Path(path) in self._handles

    def __len__(self) -> int:
        return len(self._handles)
