"""World set lookups — is a package explicitly installed?

Portage records every package the user asked for by name in the
*world file*, one ``category/package`` per line.  ``WorldSet`` answers
"is this atom's package in the world set?" by scanning that file.  The
version constraint plays no part; only the ``category/package`` pair
is compared, and only as an exact line match.

The predicate is available to callers but the ``list`` and ``set``
commands do not consult it.
"""

from pathlib import Path

from portage_env.atom import Atom
from portage_env.config import Settings
from portage_env.mapping import MappingLoadError


class WorldSet:
    """Membership test against a world file.

    The file is re-read on every query so edits made by the package
    manager are picked up without restarting.
    """

    def __init__(self, path: Path) -> None:
        """Create a world set backed by the file at *path*."""
        self._path = path

    @classmethod
    def from_settings(cls, settings: Settings) -> "WorldSet":
        """Create a world set for the configured ``world_file``."""
        return cls(settings.world_file)

    @property
    def path(self) -> Path:
        """Return the world file location."""
        return self._path

    def contains(self, atom: Atom) -> bool:
        """Return True if *atom*'s ``category/package`` is a line in the world file.

        Raises:
            MappingLoadError: If the world file cannot be read.

        """
        try:
            with self._path.open(encoding="utf-8", newline="\n") as world:
                return any(line.rstrip("\r\n") == atom.key for line in world)
        except (OSError, UnicodeDecodeError) as e:
            msg = f"Failed to read world file '{self._path}': {e}"
            raise MappingLoadError(msg) from e

    def __contains__(self, atom: Atom) -> bool:
        """Support ``atom in world``."""
        return self.contains(atom)


def in_world_set(atom: Atom, *, world_file: Path) -> bool:
    """Return True if *atom*'s package is listed in *world_file*."""
    return WorldSet(world_file).contains(atom)
