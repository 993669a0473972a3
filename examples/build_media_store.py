"""Basic media store build example.

This example demonstrates how to:
- Build a media store for a world
- Display summary statistics
- Check the written index
"""

import sys
from pathlib import Path

from mt_media_store import MediaStorePipeline, read_index


def main():
    # Change these to your world and game directories
    world_dir = Path.home() / ".minetest" / "worlds" / "world"
    game_dir = Path.home() / ".minetest" / "games" / "minetest_game"
    out_dir = Path("media")

    if not world_dir.exists() or not game_dir.exists():
        print(f"World or game not found: {world_dir}, {game_dir}", file=sys.stderr)
        print("Please update the paths in this script", file=sys.stderr)
        return

    pipeline = MediaStorePipeline.for_output_dir(
        world=world_dir,
        game=game_dir,
        out_dir=out_dir,
        placement_mode="hardlink",
    )
    result = pipeline.run()

    print("\n✓ Media store built", file=sys.stderr)
    print(f"  Files found: {result.discovered}", file=sys.stderr)
    print(f"  Unique assets: {len(result.canonical)}", file=sys.stderr)
    print(f"  Newly placed: {len(result.report.placed)}", file=sys.stderr)

    total_size = sum(a.path.stat().st_size for a in result.canonical)
    print(f"  Total size: {total_size / 1024**2:.1f} MB", file=sys.stderr)

    ids = read_index(result.index_path)
    print(f"\nIndex {result.index_path} lists {len(ids)} assets", file=sys.stderr)

    for asset, error in result.report.failures:
        print(f"  failed: {asset.path}: {error}", file=sys.stderr)


if __name__ == '__main__':
    main()
