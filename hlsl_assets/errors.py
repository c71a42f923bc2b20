# hlsl_assets/errors.py
from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from hlsl_assets.types import CompileOutcome


class HlslAssetError(Exception):
    """Base class for every error raised by hlsl_assets."""


class InvalidProfileError(HlslAssetError, ValueError):
    def __init__(self, token: str) -> None:
        super().__init__(f"Invalid shader profile: {token!r}")
        self.token = token


class SpawnError(HlslAssetError):
    """The shader compiler process could not be started at all."""

    def __init__(self, command: Sequence[str], reason: str) -> None:
        super().__init__(f"Failed to spawn {command[0]!r}: {reason}")
        self.command = tuple(command)


class CompileError(HlslAssetError):
    """Raised only when the compiler is configured to fail on error."""

    def __init__(self, outcome: CompileOutcome) -> None:
        super().__init__(
            f"{outcome.command[0]} exited with {outcome.returncode} "
            f"for {outcome.source_path}:\n{outcome.stderr.strip()}"
        )
        self.outcome = outcome


class AssetLoadError(HlslAssetError):
    pass
