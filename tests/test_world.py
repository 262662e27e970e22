"""Tests for the world-set membership predicate.

The world file lists explicitly installed packages, one
``category/package`` per line.  Membership ignores the atom's version
constraint and requires an exact line match.
"""

from pathlib import Path

import pytest

from portage_env.atom import parse_atom
from portage_env.config import WORLD_FILE_VAR, Settings
from portage_env.mapping import MappingLoadError
from portage_env.world import WorldSet, in_world_set


@pytest.fixture
def world_file(tmp_path: Path) -> Path:
    """Write a small world file."""
    path = tmp_path / "world"
    path.write_text("app-editors/vim\ndev-lang/rust\nwww-client/firefox\n")
    return path


class TestWorldSet:
    """Verify world-file lookups."""

    def test_listed_package(self, world_file: Path) -> None:
        """A listed package is in the world set."""
        assert WorldSet(world_file).contains(parse_atom("dev-lang/rust"))

    def test_version_is_ignored(self, world_file: Path) -> None:
        """Only category/package is compared."""
        assert parse_atom(">=www-client/firefox-128") in WorldSet(world_file)

    def test_unlisted_package(self, world_file: Path) -> None:
        """A package not in the file is not in the world set."""
        assert not WorldSet(world_file).contains(parse_atom("dev-lang/go"))

    def test_exact_match_only(self, world_file: Path) -> None:
        """Prefixes and substrings do not count."""
        assert not in_world_set(parse_atom("dev-lang/rus"), world_file=world_file)
        assert not in_world_set(parse_atom("lang/rust"), world_file=world_file)

    def test_crlf_lines(self, tmp_path: Path) -> None:
        """Windows line endings are tolerated."""
        path = tmp_path / "world"
        path.write_bytes(b"dev-lang/rust\r\n")
        assert in_world_set(parse_atom("dev-lang/rust"), world_file=path)

    def test_file_is_reread(self, world_file: Path) -> None:
        """Edits to the world file are seen by later queries."""
        world = WorldSet(world_file)
        atom = parse_atom("dev-lang/go")
        assert atom not in world
        with world_file.open("a") as f:
            f.write("dev-lang/go\n")
        assert atom in world

    def test_from_settings(self, world_file: Path) -> None:
        """The configured world file backs the predicate."""
        settings = Settings.from_environ({WORLD_FILE_VAR: str(world_file)})
        world = WorldSet.from_settings(settings)
        assert world.path == world_file
        assert parse_atom("app-editors/vim") in world

    def test_missing_world_file(self, tmp_path: Path) -> None:
        """A missing world file is a load error."""
        with pytest.raises(MappingLoadError, match="Failed to read world file"):
            WorldSet(tmp_path / "nope").contains(parse_atom("a/b"))
