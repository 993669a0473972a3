"""Command-line interface for building media stores.

This module parses arguments, resolves them against the optional config
file and runs the build pipeline, translating its result into an exit
status.
"""

import argparse
import sys
from pathlib import Path

from . import __version__
from .config import StoreConfig, find_config
from .core.errors import InvalidArgumentError, MediaStoreError
from .log import setup_logging
from .materializer import PlacementMode, symlinks_supported
from .pipeline import BuildResult, MediaStorePipeline

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2


def make_absolute(path: Path) -> Path:
    """Anchor a relative path at the working directory (no symlink resolution)."""
    return path if path.is_absolute() else Path.cwd() / path


def check_existing_dir(path: Path, what: str) -> Path:
    """Validate that ``path`` is an existing directory.

    Raises:
        InvalidArgumentError: If it is not
    """
    path = make_absolute(path)
    if not path.is_dir():
        raise InvalidArgumentError(f"{what}: not a directory: {path}")
    return path


def check_new_dir(path: Path, what: str) -> Path:
    """Validate that ``path`` is a directory or could be created as one.

    Raises:
        InvalidArgumentError: If neither it nor its parent is a directory
    """
    path = make_absolute(path)
    if path.is_dir() or path.parent.is_dir():
        return path
    raise InvalidArgumentError(f"{what}: invalid path: {path}")


def check_new_file(path: Path, what: str) -> Path:
    """Validate that a file can be written at ``path``.

    Raises:
        InvalidArgumentError: If the path is a directory or its parent is missing
    """
    path = make_absolute(path)
    if path.is_dir():
        raise InvalidArgumentError(f"{what}: is a directory: {path}")
    if not path.parent.is_dir():
        raise InvalidArgumentError(f"{what}: parent directory does not exist: {path.parent}")
    return path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mt-media-store",
        description="Build a content-addressed media store and index for a world's mods",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Index only
  mt-media-store -w worlds/myworld -g games/minetest_game -o media

  # Hard link assets next to the index, with an extra mod path
  mt-media-store -w worlds/myworld -g games/minetest_game -o media -l ~/mods

  # Index and assets in different places
  mt-media-store -w worlds/myworld -g games/minetest_game \\
      --index /srv/www/index.mth --media-dir /srv/www/media --copy
        """,
    )

    parser.add_argument(
        "-v", "--verbose", action="count", default=0,
        help="Show progress (-v) or per-file detail (-vv)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    parser.add_argument("mod_paths", nargs="*", type=Path, metavar="PATHS",
                        help="Additional mod paths to search")

    parser.add_argument("-w", "--world", required=True, type=Path, metavar="PATH",
                        help="Path to the world directory")
    parser.add_argument("-g", "--game", required=True, type=Path, metavar="PATH",
                        help="Path to the game directory")

    parser.add_argument("-o", "--out", type=Path, metavar="PATH",
                        help="Path to the output directory (index and assets)")
    parser.add_argument("--index", type=Path, metavar="FILE",
                        help="Path of the index file (use with --media-dir instead of --out)")
    parser.add_argument("--media-dir", type=Path, metavar="PATH",
                        help="Directory for materialized assets (use with --index)")

    link = parser.add_mutually_exclusive_group()
    link.add_argument("-c", "--copy", dest="mode", action="store_const",
                      const=PlacementMode.COPY, help="Copy assets to output folder")
    link.add_argument("-l", "--hardlink", dest="mode", action="store_const",
                      const=PlacementMode.HARDLINK, help="Hard link assets to output folder")
    # Only offered where the platform can do it
    if symlinks_supported():
        link.add_argument("-s", "--symlink", dest="mode", action="store_const",
                          const=PlacementMode.SYMLINK,
                          help="Symbolically link assets to output folder")
    link.add_argument("-n", "--index-only", dest="mode", action="store_const",
                      const=PlacementMode.NONE, help="Only write the index")

    parser.add_argument("--config", type=Path, metavar="FILE",
                        help="JSON config file (default: ./mt-media-store.json if present)")
    parser.add_argument("-j", "--jobs", type=int, metavar="N",
                        help="Worker threads for hashing and placement")
    parser.add_argument("--log-file", type=Path, metavar="FILE",
                        help="Also write a detailed log to this file")

    return parser


def create_pipeline(args: argparse.Namespace, config: StoreConfig) -> MediaStorePipeline:
    """Turn parsed arguments and config into a pipeline.

    Raises:
        InvalidArgumentError: If paths or options are invalid
        PlatformUnsupportedError: If the placement mode is unavailable here
    """
    world = check_existing_dir(args.world, "--world")
    game = check_existing_dir(args.game, "--game")
    extra_paths = [check_existing_dir(p, "mod path") for p in args.mod_paths]

    if args.jobs is not None and args.jobs < 1:
        raise InvalidArgumentError(f"--jobs must be at least 1, got {args.jobs}")

    overrides = {}
    if args.mode is not None:
        overrides["placement_mode"] = args.mode
    if args.jobs is not None:
        overrides["workers"] = args.jobs

    if args.out is not None:
        if args.index is not None or args.media_dir is not None:
            raise InvalidArgumentError("--out can not be combined with --index/--media-dir")
        out_dir = check_new_dir(args.out, "--out")
        return MediaStorePipeline.for_output_dir(
            world, game, out_dir, config, extra_paths=extra_paths, **overrides
        )

    if args.index is None or args.media_dir is None:
        raise InvalidArgumentError("either --out or both --index and --media-dir are required")

    return MediaStorePipeline(
        world=world,
        game=game,
        index_path=check_new_file(args.index, "--index"),
        media_dir=check_new_dir(args.media_dir, "--media-dir"),
        extra_paths=list(config.extra_mod_paths) + extra_paths,
        placement_mode=overrides.get("placement_mode", config.placement_mode),
        workers=overrides.get("workers", config.workers),
        media_dirs=config.media_dirs,
    )


def report(result: BuildResult) -> None:
    """Print a short summary of a finished build to stderr."""
    print(
        f"Indexed {len(result.canonical)} unique asset(s) "
        f"from {result.discovered} file(s) into {result.index_path}",
        file=sys.stderr,
    )
    placed = result.report
    if placed.placed or placed.skipped or placed.failures:
        print(
            f"Placed {len(placed.placed)}, already present {len(placed.skipped)}, "
            f"failed {len(placed.failures)}",
            file=sys.stderr,
        )


def main(argv: list[str] | None = None) -> int:
    """Main entry point. Returns the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        setup_logging(args.verbose, args.log_file)
    except OSError as e:
        print(f"Error: Could not open log file: {e}", file=sys.stderr)
        return EXIT_USAGE

    try:
        config = find_config(args.config)
        pipeline = create_pipeline(args, config)
    except InvalidArgumentError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_USAGE
    except MediaStoreError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    try:
        result = pipeline.run()
    except MediaStoreError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    report(result)
    if not result.ok:
        failures = len(result.report.failures)
        print(
            f"Error: {failures} asset(s) could not be placed; first: {result.report.first_error}",
            file=sys.stderr,
        )
        return EXIT_FAILURE

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
