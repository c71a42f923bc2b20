# hlsl_assets/importers/spirv.py
from typing import Any

import numpy as np

from hlsl_assets.errors import AssetLoadError
from hlsl_assets.importers.base import AssetImporter, LoadContext
from hlsl_assets.types import SPIRV_MAGIC, CompiledShader

_HEADER_WORDS = 5


class SpirvImporter(AssetImporter):
    def __init__(self, extension: str = "spv") -> None:
        self.extensions = (f".{extension}",)

    def import_file(self, ctx: LoadContext, settings: Any = None) -> CompiledShader:
        path = ctx.full_path
        with open(path, "rb") as f:
            data = f.read()

        if len(data) % 4 != 0 or len(data) < _HEADER_WORDS * 4:
            raise AssetLoadError(f"Truncated SPIR-V module: {path}")

        words = np.frombuffer(data, dtype="<u4")
        if int(words[0]) != SPIRV_MAGIC:
            raise AssetLoadError(f"Not a SPIR-V module: {path}")

        return CompiledShader(words=words.astype(np.uint32), path=str(path))
