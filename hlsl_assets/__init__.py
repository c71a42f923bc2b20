# hlsl_assets/__init__.py
from hlsl_assets.compiler import ShaderCompiler, build_command, output_path
from hlsl_assets.config import CompilerConfig, hot_reload_available
from hlsl_assets.errors import (
    AssetLoadError,
    CompileError,
    HlslAssetError,
    InvalidProfileError,
    SpawnError,
)
from hlsl_assets.handle import AssetHandle, AssetId
from hlsl_assets.importers.hlsl import HlslImporter
from hlsl_assets.importers.spirv import SpirvImporter
from hlsl_assets.plugin import install
from hlsl_assets.profile import PROFILES, Profile, ShaderStage, validate
from hlsl_assets.resources import ResourceManager
from hlsl_assets.server import AssetServer
from hlsl_assets.shader_registry import ShaderRegistry
from hlsl_assets.store import LoadState
from hlsl_assets.types import (
    CompiledShader,
    CompileOutcome,
    CompileSettings,
    SourceShaderAsset,
)
from hlsl_assets.watcher import SourceWatcher

__version__ = "0.1.0"

__all__ = [
    "AssetServer",
    "AssetHandle",
    "AssetId",
    "LoadState",
    "ResourceManager",
    "ShaderRegistry",
    "ShaderCompiler",
    "CompilerConfig",
    "HlslImporter",
    "SpirvImporter",
    "SourceWatcher",
    "install",
    "build_command",
    "output_path",
    "hot_reload_available",
    "validate",
    "Profile",
    "ShaderStage",
    "PROFILES",
    "CompileSettings",
    "CompileOutcome",
    "CompiledShader",
    "SourceShaderAsset",
    "HlslAssetError",
    "InvalidProfileError",
    "SpawnError",
    "CompileError",
    "AssetLoadError",
]
