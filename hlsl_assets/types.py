# hlsl_assets/types.py
from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple

import numpy as np

SPIRV_MAGIC = 0x07230203


@dataclass(frozen=True, slots=True)
class CompileSettings:
    """Per-load settings for an .hlsl asset."""

    profile: str = ""

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> CompileSettings:
        if not data:
            return cls()
        return cls(profile=str(data.get("profile", "")))

    def key(self) -> str:
        """Canonical serialized form, used as part of the load key."""
        return json.dumps(self.to_dict(), sort_keys=True, separators=(",", ":"))


@dataclass(frozen=True, slots=True)
class SourceShaderAsset:
    """Marker for a compiled source file. Does not hold the bytecode."""

    source_path: Path


@dataclass(frozen=True, slots=True)
class CompileOutcome:
    """Result of one compiler run that managed to start."""

    source_path: Path
    output_path: Path
    command: Tuple[str, ...]
    returncode: int
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def diagnostics(self) -> str:
        return self.stderr.strip()


@dataclass(frozen=True)
class CompiledShader:
    """SPIR-V module loaded from disk, ready for a rendering backend."""

    words: np.ndarray  # uint32, little-endian
    path: str  # For debugging / error reporting.

    @property
    def bytecode(self) -> bytes:
        return self.words.astype("<u4").tobytes()

    @property
    def version(self) -> Tuple[int, int]:
        # Header word 1 is 0x00MMmm00.
        word = int(self.words[1])
        return (word >> 16) & 0xFF, (word >> 8) & 0xFF
