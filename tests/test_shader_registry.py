from pathlib import Path

import pytest

from hlsl_assets.compiler import ShaderCompiler
from hlsl_assets.config import CompilerConfig
from hlsl_assets.errors import InvalidProfileError, SpawnError
from hlsl_assets.handle import AssetHandle, AssetId
from hlsl_assets.importers.hlsl import HlslImporter
from hlsl_assets.importers.spirv import SpirvImporter
from hlsl_assets.resources import ResourceManager
from hlsl_assets.server import AssetServer
from hlsl_assets.shader_registry import ShaderRegistry
from hlsl_assets.store import LoadState
from hlsl_assets.types import CompiledShader, CompileSettings, SourceShaderAsset
from tests.conftest import requires_sh


class RecordingServer:
    """Only remembers what was asked for."""

    def __init__(self):
        self.requests = []

    def load(self, path, settings=None):
        self.requests.append((Path(path).as_posix(), settings))
        return AssetHandle(AssetId(len(self.requests)), Path(path).as_posix())


def _server(root: Path, executable: str) -> AssetServer:
    # One worker keeps the compile ahead of the .spv read.
    server = AssetServer(asset_root=root, max_workers=1)
    server.register_importer(
        HlslImporter(ShaderCompiler(CompilerConfig(executable=executable)))
    )
    server.register_importer(SpirvImporter())
    return server


def test_load_issues_source_and_compiled_loads():
    server = RecordingServer()
    registry = ShaderRegistry(hot_reload=True)

    handle = registry.load("shaders/a.hlsl", server, "ps_6_0")

    assert server.requests == [
        ("shaders/a.hlsl", CompileSettings("ps_6_0")),
        ("shaders/a.spv", None),
    ]
    assert handle.path == "shaders/a.spv"
    assert registry.get("shaders/a.hlsl").path == "shaders/a.hlsl"
    assert "shaders/a.hlsl" in registry


def test_load_without_hot_reload_skips_tracking():
    server = RecordingServer()
    registry = ShaderRegistry(hot_reload=False)

    handle = registry.load("shaders/a.hlsl", server, "ps_6_0")

    assert server.requests == [("shaders/a.spv", None)]
    assert handle.path == "shaders/a.spv"
    assert len(registry) == 0


def test_reinserting_a_path_replaces_the_entry():
    server = RecordingServer()
    registry = ShaderRegistry(hot_reload=True)

    registry.load("shaders/a.hlsl", server, "ps_6_0")
    first = registry.get("shaders/a.hlsl")
    registry.load(Path("shaders/a.hlsl"), server, "ps_6_1")
    second = registry.get("shaders/a.hlsl")

    assert len(registry) == 1
    assert registry.paths() == [Path("shaders/a.hlsl")]
    assert first != second
    assert second.id == AssetId(3)


def test_load_never_raises_on_bad_profile(tmp_path):
    registry = ShaderRegistry(hot_reload=True)
    with AssetServer(asset_root=tmp_path) as server:
        server.register_importer(HlslImporter())
        server.register_importer(SpirvImporter())
        handle = registry.load("a.hlsl", server, "nope")

    server.update()
    source = registry.get("a.hlsl")
    assert isinstance(server.error(source), InvalidProfileError)
    assert server.state(handle) is LoadState.FAILED


@requires_sh
def test_load_compiles_and_loads_bytecode(assets, fake_dxc):
    registry = ShaderRegistry(hot_reload=True)
    with _server(assets, fake_dxc) as server:
        handle = registry.load("shaders/basic.hlsl", server, "ps_6_0")

    server.update()

    source = server.get(registry.get("shaders/basic.hlsl"))
    assert source == SourceShaderAsset(assets / "shaders" / "basic.hlsl")

    shader = server.get(handle)
    assert isinstance(shader, CompiledShader)
    assert shader.version == (1, 0)
    assert (assets / "shaders" / "basic.spv").exists()


@requires_sh
def test_two_profiles_register_distinct_source_loads(assets, fake_dxc):
    registry = ShaderRegistry(hot_reload=True)
    with _server(assets, fake_dxc) as server:
        ps = registry.load("shaders/basic.hlsl", server, "ps_6_0")
        ps_source = registry.get("shaders/basic.hlsl")
        vs = registry.load("shaders/basic.hlsl", server, "vs_6_0")
        vs_source = registry.get("shaders/basic.hlsl")

    server.update()

    assert ps_source != vs_source
    assert ps.path == vs.path == "shaders/basic.spv"
    assert server.state(ps_source) is LoadState.LOADED
    assert server.state(vs_source) is LoadState.LOADED
    assert len(registry) == 1


@requires_sh
def test_compile_error_surfaces_on_bytecode_load(assets, broken_dxc):
    registry = ShaderRegistry(hot_reload=True)
    with _server(assets, broken_dxc) as server:
        handle = registry.load("shaders/basic.hlsl", server, "ps_6_0")

    server.update()

    assert server.state(registry.get("shaders/basic.hlsl")) is LoadState.LOADED
    assert server.state(handle) is LoadState.FAILED
    assert isinstance(server.error(handle), FileNotFoundError)


def test_spawn_failure_fails_source_load(assets, tmp_path):
    registry = ShaderRegistry(hot_reload=True)
    with _server(assets, str(tmp_path / "missing")) as server:
        handle = registry.load("shaders/basic.hlsl", server, "ps_6_0")

    server.update()

    source = registry.get("shaders/basic.hlsl")
    assert isinstance(server.error(source), SpawnError)
    assert server.state(handle) is LoadState.FAILED
    assert not (assets / "shaders" / "basic.spv").exists()


def test_load_from_resources(tmp_path):
    registry = ShaderRegistry(hot_reload=True)
    resources = ResourceManager()
    resources.add(registry)
    with AssetServer(asset_root=tmp_path) as server:
        resources.add(server)
        handle = ShaderRegistry.load_from_resources("a.hlsl", resources, "cs_6_0")

    assert handle.path == "a.spv"
    assert "a.hlsl" in registry


def test_load_from_resources_requires_registry(tmp_path):
    resources = ResourceManager()
    with AssetServer(asset_root=tmp_path) as server:
        resources.add(server)
        with pytest.raises(KeyError, match="ShaderRegistry"):
            ShaderRegistry.load_from_resources("a.hlsl", resources, "ps_6_0")


def test_contains_rejects_other_types():
    assert 42 not in ShaderRegistry(hot_reload=True)
