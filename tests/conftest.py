"""Pytest fixtures for media store tests."""

from pathlib import Path

import pytest


def make_mod(root: Path, name: str, media: dict[str, dict[str, bytes]] | None = None) -> Path:
    """Create a mod directory with an init.lua and the given media files.

    ``media`` maps a media folder name to ``{filename: bytes}``.
    """
    mod = root / name
    mod.mkdir(parents=True)
    (mod / "init.lua").write_text("-- mod\n")
    for folder, files in (media or {}).items():
        (mod / folder).mkdir()
        for filename, data in files.items():
            (mod / folder / filename).write_bytes(data)
    return mod


def make_modpack(root: Path, name: str) -> Path:
    """Create an empty modpack directory."""
    pack = root / name
    pack.mkdir(parents=True)
    (pack / "modpack.txt").write_text("")
    return pack


def write_world_mt(world: Path, enabled: dict[str, str]) -> Path:
    """Write a world.mt enabling mods by ``{name: value}``."""
    world.mkdir(parents=True, exist_ok=True)
    lines = ["gameid = minetest", "backend = sqlite3"]
    lines += [f"load_mod_{name} = {value}" for name, value in enabled.items()]
    path = world / "world.mt"
    path.write_text("\n".join(lines) + "\n")
    return path


@pytest.fixture
def world_dir(tmp_path: Path) -> Path:
    """A world with mod A enabled and mod B disabled, both under worldmods/."""
    world = tmp_path / "world"
    write_world_mt(world, {"mod_a": "true", "mod_b": "false"})
    make_mod(world / "worldmods", "mod_a", {"textures": {"t.png": b"abc"}})
    make_mod(world / "worldmods", "mod_b", {"textures": {"t.png": b"abc"}})
    return world


@pytest.fixture
def game_dir(tmp_path: Path) -> Path:
    """A game with a single mod C."""
    game = tmp_path / "game"
    make_mod(game / "mods", "mod_c", {"textures": {"u.png": b"xyz"}})
    return game


@pytest.fixture
def out_dir(tmp_path: Path) -> Path:
    return tmp_path / "out"
