# -*- coding: utf-8 -*-
"""
python -m meshdepth model.obj [--dump out.npz]

Загружает меш, печатает счётчики, масштаб и статистику глубины.
"""

import argparse
import sys

import numpy as np

from meshdepth.loader.obj_loader import ObjLoader, MeshGeometry
from meshdepth.utils.config import Config
from meshdepth.utils.logger import logger, set_level


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {text!r}") from None
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="meshdepth",
        description="Convert a Wavefront OBJ file into interleaved GPU buffers with internal depth.",
    )
    parser.add_argument("model", help="path to the .obj file")
    parser.add_argument("--config", default=None, help="JSON config file")
    parser.add_argument("--backend", choices=("memory", "gl"), default=None,
                        help="where committed buffers go (default: from config)")
    parser.add_argument("--workers", type=_positive_int, default=None,
                        help="threads for the normal/depth kernels")
    parser.add_argument("--no-jit", action="store_true",
                        help="run the kernels as plain Python")
    parser.add_argument("--strict", action="store_true",
                        help="reject malformed numbers and missing face indices")
    parser.add_argument("--dump", default=None,
                        help="write vertices/indices/depth to this .npz file")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def config_from_args(args) -> Config:
    config = Config(args.config)
    if args.backend:
        config["backend"] = args.backend
    compute = config.section("compute")
    if args.workers is not None:
        compute["workers"] = args.workers
    if args.no_jit:
        compute["jit"] = False
    config["compute"] = compute
    if args.strict:
        config["parser"] = {"lenient_numbers": False, "default_missing_index": False}
    return config


def summarize(geometry: MeshGeometry) -> str:
    counts = geometry.counts
    lines = [
        f"vertices:   {counts.vertices}",
        f"normals:    {counts.normals}",
        f"texcoords:  {counts.texcoords}",
        f"triangles:  {counts.triangles}",
        f"scale:      {geometry.scale:.6g}",
    ]
    stats = geometry.internal_depth.stats()
    hits = int(geometry.internal_depth.hit_mask().sum())
    lines.append(f"depth hits: {hits}/{len(geometry.internal_depth)}")
    if stats is not None:
        lines.append("depth:      min {:.6g}  max {:.6g}  mean {:.6g}".format(*stats))
    return "\n".join(lines)


def dump(geometry: MeshGeometry, path: str) -> None:
    np.savez(
        path,
        vertices=geometry.vertices.vertices(),
        indices=geometry.indices.as_np(),
        depth=geometry.internal_depth.distances,
        scale=np.float32(geometry.scale),
    )
    logger.info(f"[meshdepth] wrote {path}")


def _load(args, config) -> MeshGeometry:
    if config["backend"] == "gl":
        from meshdepth.graphics.context import offscreen_context
        with offscreen_context():
            return ObjLoader(config).load_mesh(args.model)
    return ObjLoader(config).load_mesh(args.model)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    config = config_from_args(args)
    set_level("DEBUG" if args.verbose else config["log_level"])

    geometry = _load(args, config)
    if not geometry.loaded:
        print(f"meshdepth: could not load {args.model}", file=sys.stderr)
        return 1

    print(summarize(geometry))
    if args.verbose:
        for stage, ms in geometry.timings.items():
            print(f"  {stage:<15} {ms:8.2f} ms")
    if args.dump:
        dump(geometry, args.dump)
    return 0


if __name__ == "__main__":
    sys.exit(main())
