# hlsl_assets/config.py
from __future__ import annotations

import os
import shlex
import sys
from dataclasses import dataclass, field
from typing import Tuple

# Targets without a file watcher; tracking source handles there is pure overhead.
_NO_WATCH_PLATFORMS = ("emscripten", "wasi")

_TRUTHY = ("1", "true", "yes", "on")
_FALSY = ("0", "false", "no", "off")


def hot_reload_available() -> bool:
    """Resolve the hot reload capability flag for this process."""
    value = os.getenv("HLSL_ASSETS_HOT_RELOAD", "").strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    return sys.platform not in _NO_WATCH_PLATFORMS


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name, "").strip().lower()
    if not value:
        return default
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(f"{name} must be a boolean flag, got {value!r}")


@dataclass(frozen=True, slots=True)
class CompilerConfig:
    """How the external shader compiler is invoked."""

    executable: str = "dxc"
    output_extension: str = "spv"

    # Raise CompileError on a non-zero exit instead of logging and continuing.
    fail_on_error: bool = False

    hot_reload: bool = field(default_factory=hot_reload_available)
    extra_args: Tuple[str, ...] = ()

    @classmethod
    def from_env(cls) -> CompilerConfig:
        return cls(
            executable=os.getenv("HLSL_ASSETS_DXC", "") or "dxc",
            fail_on_error=_env_flag("HLSL_ASSETS_FAIL_ON_ERROR", False),
            hot_reload=hot_reload_available(),
            extra_args=tuple(shlex.split(os.getenv("HLSL_ASSETS_EXTRA_ARGS", ""))),
        )
