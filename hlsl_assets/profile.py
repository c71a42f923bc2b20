# hlsl_assets/profile.py
from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import FrozenSet, Optional

from hlsl_assets.errors import InvalidProfileError


class ShaderStage(StrEnum):
    PIXEL = "ps"
    VERTEX = "vs"
    GEOMETRY = "gs"
    HULL = "hs"
    DOMAIN = "ds"
    COMPUTE = "cs"
    LIBRARY = "lib"
    MESH = "ms"
    AMPLIFICATION = "as"


# Minor versions of shader model 6 each stage accepts.
_STAGE_MINORS = {
    ShaderStage.PIXEL: range(0, 8),
    ShaderStage.VERTEX: range(0, 8),
    ShaderStage.GEOMETRY: range(0, 8),
    ShaderStage.HULL: range(0, 8),
    ShaderStage.DOMAIN: range(0, 8),
    ShaderStage.COMPUTE: range(0, 8),
    ShaderStage.LIBRARY: range(1, 8),
    ShaderStage.MESH: range(5, 8),
    ShaderStage.AMPLIFICATION: range(5, 8),
}

_ENTRY_POINTS = {
    ShaderStage.PIXEL: "fragment",
    ShaderStage.VERTEX: "vertex",
}

PROFILES: FrozenSet[str] = frozenset(
    f"{stage.value}_6_{minor}"
    for stage, minors in _STAGE_MINORS.items()
    for minor in minors
)


@dataclass(frozen=True, slots=True)
class Profile:
    """A validated compilation target, e.g. ``ps_6_0``."""

    token: str
    stage: ShaderStage
    major: int
    minor: int

    @property
    def entry_point(self) -> Optional[str]:
        """Entry-point name forced on the compiler, or None for its default."""
        return _ENTRY_POINTS.get(self.stage)

    def __str__(self) -> str:
        return self.token


def validate(token: str) -> Profile:
    if token not in PROFILES:
        raise InvalidProfileError(token)

    stage, major, minor = token.split("_")
    return Profile(
        token=token,
        stage=ShaderStage(stage),
        major=int(major),
        minor=int(minor),
    )


def entry_point_for(token: str) -> Optional[str]:
    return validate(token).entry_point
