# hlsl_assets/plugin.py
from typing import Optional

from hlsl_assets.compiler import ShaderCompiler
from hlsl_assets.config import CompilerConfig
from hlsl_assets.importers.hlsl import HlslImporter
from hlsl_assets.importers.spirv import SpirvImporter
from hlsl_assets.resources import ResourceManager
from hlsl_assets.server import AssetServer
from hlsl_assets.shader_registry import ShaderRegistry
from hlsl_assets.watcher import SourceWatcher


def install(
    resources: ResourceManager, config: Optional[CompilerConfig] = None
) -> ShaderRegistry:
    """Wire HLSL compilation into the AssetServer already held by `resources`."""
    config = config or CompilerConfig.from_env()
    server = resources.get(AssetServer)

    server.register_importer(HlslImporter(ShaderCompiler(config)))
    server.register_importer(SpirvImporter(config.output_extension))

    registry = ShaderRegistry(
        hot_reload=config.hot_reload, output_extension=config.output_extension
    )
    resources.add(config)
    resources.add(registry)
    if config.hot_reload:
        resources.add(SourceWatcher(server))
    return registry
