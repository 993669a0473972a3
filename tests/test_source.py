"""Tests for the filesystem search root (mod tree walker and media collector)."""

import hashlib
import os
from pathlib import Path

import pytest

from mt_media_store.core.errors import AssetIOError
from mt_media_store.core.types import RootKind
from mt_media_store.platforms.filesystem import ModTreeSource, collect_media, list_media_files
from mt_media_store.registry import SourceRegistry

from conftest import make_mod, make_modpack


def mod_names(source: ModTreeSource) -> set[str]:
    return {mod.name for mod in source.walk()}


class TestModTreeWalk:
    """Test mod and modpack discovery."""

    def test_finds_mods(self, tmp_path: Path) -> None:
        """Test that mods directly under the root are found."""
        make_mod(tmp_path, "a")
        make_mod(tmp_path, "b")

        assert mod_names(ModTreeSource(tmp_path)) == {"a", "b"}

    def test_descends_into_nested_modpacks(self, tmp_path: Path) -> None:
        """Test that nested modpacks are walked."""
        outer = make_modpack(tmp_path, "pack")
        inner = make_modpack(outer, "inner")
        make_mod(outer, "a")
        make_mod(inner, "b")

        mods = {mod.name: mod.path for mod in ModTreeSource(tmp_path).walk()}

        assert mods == {"a": outer / "a", "b": inner / "b"}

    def test_skips_unmarked_dirs_and_files(self, tmp_path: Path) -> None:
        """Test that VCS folders, stray files and unmarked folders are ignored."""
        (tmp_path / ".git").mkdir()
        (tmp_path / "notes").mkdir()
        (tmp_path / "notes" / "textures").mkdir()
        (tmp_path / "readme.txt").write_text("hi")
        make_mod(tmp_path, "a")

        assert mod_names(ModTreeSource(tmp_path)) == {"a"}

    def test_modpack_marker_wins_over_mod_marker(self, tmp_path: Path) -> None:
        """Test that modpack.txt takes precedence over init.lua."""
        pack = make_modpack(tmp_path, "pack")
        (pack / "init.lua").write_text("")
        make_mod(pack, "inner")

        assert mod_names(ModTreeSource(tmp_path)) == {"inner"}

    def test_filter_applies_to_leaf_mods_only(self, tmp_path: Path) -> None:
        """Test that modpacks are walked even when not listed as enabled."""
        pack = make_modpack(tmp_path, "pack")
        make_mod(pack, "wanted")
        make_mod(pack, "unwanted")
        make_mod(tmp_path, "top")

        source = ModTreeSource(tmp_path, enabled=frozenset({"wanted", "top"}))

        assert mod_names(source) == {"wanted", "top"}

    def test_no_filter_includes_everything(self, tmp_path: Path) -> None:
        """Test that no filter includes every mod."""
        make_mod(tmp_path, "a")
        make_mod(tmp_path, "b")

        assert mod_names(ModTreeSource(tmp_path, enabled=None)) == {"a", "b"}

    def test_empty_filter_excludes_everything(self, tmp_path: Path) -> None:
        """Test that an empty filter includes no mods."""
        make_mod(tmp_path, "a")

        assert mod_names(ModTreeSource(tmp_path, enabled=frozenset())) == set()

    def test_mods_carry_root_kind(self, tmp_path: Path) -> None:
        """Test that mods record the kind of root they came from."""
        make_mod(tmp_path, "a")

        (mod,) = ModTreeSource(tmp_path, kind=RootKind.GAME).walk()

        assert mod.root_kind is RootKind.GAME

    def test_missing_root_is_an_error(self, tmp_path: Path) -> None:
        """Test that a missing root raises AssetIOError."""
        with pytest.raises(AssetIOError, match="does not exist"):
            list(ModTreeSource(tmp_path / "missing").walk())

    def test_missing_optional_root_is_empty(self, tmp_path: Path) -> None:
        """Test that a missing optional root yields nothing."""
        assert list(ModTreeSource(tmp_path / "missing", optional=True).walk()) == []

    @pytest.mark.skipif(
        not hasattr(os, "geteuid") or os.geteuid() == 0,
        reason="needs a non-root POSIX user for permission errors",
    )
    def test_unreadable_modpack_aborts(self, tmp_path: Path) -> None:
        """Test that traversal errors propagate instead of being skipped."""
        pack = make_modpack(tmp_path, "pack")
        make_mod(pack, "a")
        pack.chmod(0o000)
        try:
            with pytest.raises(AssetIOError):
                list(ModTreeSource(tmp_path).walk())
        finally:
            pack.chmod(0o755)

    def test_traversal_error_aborts(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that a directory that cannot be listed aborts the walk."""
        pack = make_modpack(tmp_path, "pack")
        make_mod(pack, "a")
        real_scandir = os.scandir

        def refuse_pack(path="."):
            if Path(path) == pack:
                raise PermissionError(13, "Permission denied", str(path))
            return real_scandir(path)

        monkeypatch.setattr(os, "scandir", refuse_pack)

        with pytest.raises(AssetIOError, match="Could not read directory"):
            list(ModTreeSource(tmp_path).walk())

    def test_get_mod(self, tmp_path: Path) -> None:
        """Test lookup of a mod by name."""
        make_mod(tmp_path, "a")
        source = ModTreeSource(tmp_path)

        assert source.get_mod("a").path == tmp_path / "a"
        with pytest.raises(KeyError):
            source.get_mod("nope")


class TestMediaCollector:
    """Test media listing and hashing within one mod."""

    def test_media_folder_order(self, tmp_path: Path) -> None:
        """Test that files come grouped textures, models, sounds."""
        mod = make_mod(tmp_path, "m", {
            "sounds": {"s.ogg": b"s"},
            "models": {"m.obj": b"m"},
            "textures": {"t.png": b"t"},
        })

        files = list_media_files(mod)

        assert [f.parent.name for f in files] == ["textures", "models", "sounds"]

    def test_ignores_other_folders_and_nested_dirs(self, tmp_path: Path) -> None:
        """Test that only direct files of media folders are listed."""
        mod = make_mod(tmp_path, "m", {
            "textures": {"t.png": b"t"},
            "locale": {"m.de.tr": b"x"},
        })
        (mod / "textures" / "sub").mkdir()
        (mod / "textures" / "sub" / "deep.png").write_bytes(b"deep")
        (mod / "top.png").write_bytes(b"top")

        assert list_media_files(mod) == [mod / "textures" / "t.png"]

    def test_missing_media_folders(self, tmp_path: Path) -> None:
        """Test that a mod without media folders has no media."""
        mod = make_mod(tmp_path, "m")

        assert collect_media(mod) == []

    def test_collect_hashes_files(self, tmp_path: Path) -> None:
        """Test that collected media carries content identifiers."""
        mod = make_mod(tmp_path, "m", {"textures": {"t.png": b"abc"}, "sounds": {"s.ogg": b"ogg"}})

        assets = collect_media(mod)

        assert [a.path for a in assets] == [mod / "textures" / "t.png", mod / "sounds" / "s.ogg"]
        assert assets[0].content_id == hashlib.sha1(b"abc").digest()
        assert assets[1].content_id == hashlib.sha1(b"ogg").digest()

    def test_custom_media_dirs(self, tmp_path: Path) -> None:
        """Test that the media folder list can be changed."""
        mod = make_mod(tmp_path, "m", {"textures": {"t.png": b"t"}, "media": {"x": b"x"}})

        assert list_media_files(mod, ("media",)) == [mod / "media" / "x"]


class TestRegisteredSources:
    """Test the factories registered by the filesystem platform."""

    def test_kinds_registered(self) -> None:
        """Test that all three root kinds are registered."""
        assert {"world", "game", "extra"} <= set(SourceRegistry.list_sources())

    def test_world_source_uses_worldmods(self, tmp_path: Path) -> None:
        """Test that the world root is its worldmods/ folder."""
        source = SourceRegistry.create_source("world", world=tmp_path, enabled=frozenset())

        assert source.root == tmp_path / "worldmods"
        assert source.optional

    def test_game_source_is_unfiltered(self, tmp_path: Path) -> None:
        """Test that the game root ignores the enabled set."""
        source = SourceRegistry.create_source("game", game=tmp_path)

        assert source.root == tmp_path / "mods"
        assert source.enabled is None

    def test_unknown_source(self) -> None:
        """Test that an unknown source kind is rejected."""
        with pytest.raises(ValueError, match="Unknown source"):
            SourceRegistry.create_source("ftp")
