import stat
import sys
from pathlib import Path

import pytest

# Five-word SPIR-V header: magic, version 1.0, generator, bound, schema.
SPIRV_HEADER = (
    r"\003\002\043\007\000\000\001\000\000\000\000\000"
    r"\001\000\000\000\000\000\000\000"
)

FAKE_DXC = f"""#!/bin/sh
printf '%s\\n' "$@" > "$0.args"
out=""
while [ $# -gt 0 ]; do
    case "$1" in
        -Fo) out="$2"; shift ;;
    esac
    shift
done
printf '{SPIRV_HEADER}' > "$out"
"""

SLOW_DXC = FAKE_DXC.replace("#!/bin/sh\n", "#!/bin/sh\nsleep 0.5\n", 1)

BROKEN_DXC = """#!/bin/sh
printf '%s\\n' "$@" > "$0.args"
echo "basic.hlsl:3:5: error: unknown type name 'flaot'" >&2
exit 1
"""

requires_sh = pytest.mark.skipif(
    sys.platform == "win32", reason="fake compiler is a POSIX shell script"
)


def _write_script(path: Path, body: str) -> str:
    path.write_text(body)
    path.chmod(path.stat().st_mode | stat.S_IEXEC)
    return str(path)


@pytest.fixture
def fake_dxc(tmp_path):
    """A stand-in compiler that writes a minimal SPIR-V module to -Fo."""
    return _write_script(tmp_path / "fake-dxc", FAKE_DXC)


@pytest.fixture
def slow_dxc(tmp_path):
    """Like fake_dxc, but the .spv shows up half a second after the start."""
    return _write_script(tmp_path / "slow-dxc", SLOW_DXC)


@pytest.fixture
def broken_dxc(tmp_path):
    """A stand-in compiler that reports an error and writes nothing."""
    return _write_script(tmp_path / "broken-dxc", BROKEN_DXC)


@pytest.fixture
def assets(tmp_path):
    """Asset root holding shaders/basic.hlsl."""
    root = tmp_path / "assets"
    (root / "shaders").mkdir(parents=True)
    (root / "shaders" / "basic.hlsl").write_text(
        "float4 fragment() : SV_Target { return 1; }"
    )
    return root


def recorded_args(script: str) -> list[str]:
    return Path(f"{script}.args").read_text().splitlines()
