# hlsl_assets/compiler.py
from __future__ import annotations

import subprocess
from pathlib import Path
from typing import List, Optional

from hlsl_assets.config import CompilerConfig
from hlsl_assets.errors import CompileError, SpawnError
from hlsl_assets.log import logger
from hlsl_assets.profile import Profile, validate
from hlsl_assets.types import CompileOutcome


def output_path(source: str | Path, extension: str = "spv") -> Path:
    """Where the compiled module for `source` is written."""
    return Path(source).with_suffix(f".{extension}")


def build_command(
    source: str | Path,
    profile: Profile,
    config: Optional[CompilerConfig] = None,
) -> List[str]:
    config = config or CompilerConfig()
    cmd = [
        config.executable,
        str(source),
        "-T",
        profile.token,
        "-spirv",
        "-fvk-use-gl-layout",
        "-Fo",
        str(output_path(source, config.output_extension)),
    ]
    if profile.entry_point is not None:
        cmd.append(f"-fspv-entrypoint-name={profile.entry_point}")
    cmd.extend(config.extra_args)
    return cmd


class ShaderCompiler:
    """
    Runs the external compiler for one (source, profile) pair.

    `compile` blocks until the process exits. Call it from a worker pool,
    never from a thread that services other loads.
    """

    def __init__(self, config: Optional[CompilerConfig] = None) -> None:
        self.config = config or CompilerConfig()

    def compile(self, source: str | Path, profile: str) -> CompileOutcome:
        target = validate(profile)
        cmd = build_command(source, target, self.config)

        logger.debug(f"Compiling {source} ({target})")
        try:
            proc = subprocess.run(cmd, capture_output=True)
        except OSError as e:
            raise SpawnError(cmd, str(e)) from e

        outcome = CompileOutcome(
            source_path=Path(source),
            output_path=output_path(source, self.config.output_extension),
            command=tuple(cmd),
            returncode=proc.returncode,
            stderr=proc.stderr.decode("utf-8", errors="replace"),
        )

        if outcome.ok and not outcome.diagnostics:
            return outcome

        if not outcome.ok and self.config.fail_on_error:
            raise CompileError(outcome)

        # The .spv load that follows fails on its own if nothing was written.
        logger.warning(
            f"{self.config.executable} exited with {outcome.returncode} "
            f"for {source}:\n{outcome.diagnostics}"
        )
        return outcome
