"""
Command-line interface for meshparts.
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from . import __version__
from .graph import AdjacencyGraph
from .objio import WriteOptions, read_obj, write_obj, write_vtp
from .ops import ON_MISSING_MODES, connected_components

logger = logging.getLogger(__name__)

_AXES = {"x": 0, "y": 1, "z": 2, "0": 0, "1": 1, "2": 2}


def create_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="meshparts",
        description="Split OBJ meshes into connected components and export them",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"meshparts {__version__}")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    info_parser = subparsers.add_parser("info", help="Print mesh statistics")
    info_parser.add_argument("mesh_file", help="Input OBJ file")

    split_parser = subparsers.add_parser("split", help="Write one file per connected component")
    split_parser.add_argument("mesh_file", help="Input OBJ file")
    split_parser.add_argument("-o", "--output-dir", default="components", help="Output directory")
    split_parser.add_argument("--axis", choices=sorted(_AXES), default="x", help="Sorting axis")
    split_parser.add_argument("--prefix", default="component", help="Output file name prefix")
    split_parser.add_argument("--vtp", action="store_true", help="Also write .vtp files")
    _add_write_options(split_parser)

    convert_parser = subparsers.add_parser("convert", help="Convert an OBJ file to OBJ or VTP")
    convert_parser.add_argument("mesh_file", help="Input OBJ file")
    convert_parser.add_argument("output", help="Output file (.obj or .vtp)")
    _add_write_options(convert_parser)

    slice_parser = subparsers.add_parser("slice", help="Extract the sub-mesh of selected vertices")
    slice_parser.add_argument("mesh_file", help="Input OBJ file")
    slice_parser.add_argument("output", help="Output OBJ file")
    slice_parser.add_argument(
        "--vertices", type=int, nargs="+", required=True, help="0-based vertex indices to keep"
    )
    slice_parser.add_argument(
        "--on-missing",
        choices=ON_MISSING_MODES,
        default="raise",
        help="Handling of face vertices outside the selection",
    )
    _add_write_options(slice_parser)

    return parser


def _add_write_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--precision", type=int, default=18, help="Coordinate digits")
    parser.add_argument("--no-header", action="store_true", help="Omit the OBJ header comment")


def _write_options(args: argparse.Namespace) -> WriteOptions:
    return WriteOptions(precision=args.precision, header=not args.no_header)


def configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def info_command(args: argparse.Namespace) -> int:
    mesh = read_obj(args.mesh_file)
    n_components = len(AdjacencyGraph(mesh).get_connected_components())
    print(f"File: {args.mesh_file}")
    print(f"Vertices: {mesh.num_vertices}")
    print(f"Normals: {mesh.num_normals}")
    print(f"Faces: {mesh.num_faces}")
    print(f"Connected components: {n_components}")
    return 0


def split_command(args: argparse.Namespace) -> int:
    mesh = read_obj(args.mesh_file)
    pieces = connected_components(mesh, _AXES[args.axis])
    os.makedirs(args.output_dir, exist_ok=True)
    options = _write_options(args)
    width = len(str(max(len(pieces) - 1, 0)))
    for i, piece in enumerate(pieces):
        stem = os.path.join(args.output_dir, f"{args.prefix}_{i:0{width}d}")
        write_obj(piece, stem + ".obj", options)
        if args.vtp:
            write_vtp(piece, stem + ".vtp", options)
    print(f"Wrote {len(pieces)} component(s) to {args.output_dir}")
    return 0


def convert_command(args: argparse.Namespace) -> int:
    mesh = read_obj(args.mesh_file)
    ext = os.path.splitext(args.output)[1].lower()
    if ext == ".vtp":
        write_vtp(mesh, args.output, _write_options(args))
    elif ext == ".obj":
        write_obj(mesh, args.output, _write_options(args))
    else:
        raise ValueError(f"Unsupported output format: {ext or args.output}")
    return 0


def slice_command(args: argparse.Namespace) -> int:
    mesh = read_obj(args.mesh_file)
    piece = mesh.slice(args.vertices, on_missing=args.on_missing)
    write_obj(piece, args.output, _write_options(args))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    commands = {
        "info": info_command,
        "split": split_command,
        "convert": convert_command,
        "slice": slice_command,
    }
    if args.command is None:
        parser.print_help()
        return 1

    try:
        return commands[args.command](args)
    except (OSError, ValueError, IndexError) as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
