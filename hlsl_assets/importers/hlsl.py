# hlsl_assets/importers/hlsl.py
from typing import Any, Mapping, Optional

from hlsl_assets.compiler import ShaderCompiler
from hlsl_assets.importers.base import AssetImporter, LoadContext
from hlsl_assets.log import logger
from hlsl_assets.types import CompileSettings, SourceShaderAsset


def _coerce_settings(
    settings: CompileSettings | Mapping[str, Any] | None,
) -> CompileSettings:
    if isinstance(settings, CompileSettings):
        return settings
    return CompileSettings.from_dict(settings)


class HlslImporter(AssetImporter):
    """
    Compiles an .hlsl file to SPIR-V next to the source.

    The result only names the source that was compiled. The .spv itself is
    loaded separately, so a compile that fails after the compiler started
    still yields a SourceShaderAsset; only a failure to start the compiler
    (or an invalid profile) fails the load.
    """

    extensions = (".hlsl",)

    def __init__(self, compiler: Optional[ShaderCompiler] = None) -> None:
        self.compiler = compiler or ShaderCompiler()

    def import_file(
        self,
        ctx: LoadContext,
        settings: CompileSettings | Mapping[str, Any] | None = None,
    ) -> SourceShaderAsset:
        compile_settings = _coerce_settings(settings)
        path = ctx.full_path

        outcome = self.compiler.compile(path, compile_settings.profile)
        if outcome.ok:
            logger.info(f"Compiled {ctx.asset_path} -> {outcome.output_path.name}")

        return SourceShaderAsset(source_path=path)
