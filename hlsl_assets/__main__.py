"""
Command line entry point.

    python -m hlsl_assets compile shaders/basic.hlsl -T ps_6_0
    python -m hlsl_assets watch assets shaders/basic.hlsl:ps_6_0 shaders/basic_vs.hlsl:vs_6_0
"""

from __future__ import annotations

import argparse
import logging
import sys
import threading
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

from hlsl_assets.compiler import ShaderCompiler
from hlsl_assets.config import CompilerConfig
from hlsl_assets.errors import HlslAssetError
from hlsl_assets.log import logger
from hlsl_assets.plugin import install
from hlsl_assets.resources import ResourceManager
from hlsl_assets.server import AssetServer
from hlsl_assets.shader_registry import ShaderRegistry
from hlsl_assets.watcher import SourceWatcher


def _config(args: argparse.Namespace) -> CompilerConfig:
    config = CompilerConfig.from_env()
    if args.dxc:
        config = replace(config, executable=args.dxc)
    if getattr(args, "strict", False):
        config = replace(config, fail_on_error=True)
    return config


def _compile(args: argparse.Namespace) -> int:
    compiler = ShaderCompiler(_config(args))
    try:
        outcome = compiler.compile(Path(args.source), args.profile)
    except HlslAssetError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print(outcome.output_path)
    return 0


def _parse_target(target: str) -> tuple[str, str]:
    path, sep, profile = target.rpartition(":")
    if not sep or not path:
        raise argparse.ArgumentTypeError(f"expected <file>:<profile>, got {target!r}")
    return path, profile


def _watch(args: argparse.Namespace) -> int:
    config = replace(_config(args), hot_reload=True)
    resources = ResourceManager()
    with resources.add(AssetServer(asset_root=Path(args.root))):
        install(resources, config)

        for path, profile in args.targets:
            ShaderRegistry.load_from_resources(path, resources, profile)

        stop = threading.Event()
        try:
            resources.get(SourceWatcher).run(args.interval, stop)
        except KeyboardInterrupt:
            stop.set()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="hlsl_assets", description="Compile HLSL shaders to SPIR-V with dxc."
    )
    parser.add_argument("--dxc", help="Path to the dxc executable.")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="command", required=True)

    p_compile = sub.add_parser("compile", help="Compile one shader and exit.")
    p_compile.add_argument("source")
    p_compile.add_argument("-T", dest="profile", required=True)
    p_compile.add_argument(
        "--strict", action="store_true", help="Fail on a non-zero compiler exit."
    )
    p_compile.set_defaults(func=_compile)

    p_watch = sub.add_parser("watch", help="Recompile shaders as they change.")
    p_watch.add_argument("root", help="Asset root the targets are relative to.")
    p_watch.add_argument("targets", nargs="+", type=_parse_target)
    p_watch.add_argument("--interval", type=float, default=0.5)
    p_watch.set_defaults(func=_watch)

    args = parser.parse_args(argv)

    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    if args.verbose:
        logger.setLevel(logging.DEBUG)

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
