"""Environment mappings — which atoms receive which environment profile.

Portage reads ``/etc/portage/package.env/<profile>`` files whose lines
look like::

    dev-lang/rust          clang.conf
    >=www-client/firefox-128 lto.conf

Only the first whitespace-separated token on each line matters to us:
it is the atom assigned to the profile named by the file.  Blank lines
(and empty files) contribute nothing.

``EnvironmentMappingSet`` owns the atoms of one profile.  It starts
*unloaded* with an empty set and becomes *loaded* after the first
successful ``reload()``.  Reloading is a union: atoms read from the
store are added, atoms that disappeared from the file stay in memory.
There is no way to remove an atom.
"""

from collections.abc import Iterator
from pathlib import Path
from typing import IO

from portage_env.atom import Atom, AtomParseError, parse_atom
from portage_env.config import DEFAULT_CONFIG_DIR
from portage_env.logging import Logger, LogLevel


class MappingLoadError(Exception):
    """Raised when a backing store cannot be opened, created, or read."""


class EnvironmentMappingSet:
    """The set of atoms assigned to one environment profile.

    Construction is free of side effects: the backing store is only
    touched by ``reload()``.
    """

    def __init__(
        self,
        profile: str,
        *,
        base_dir: Path = DEFAULT_CONFIG_DIR,
        logger: Logger | None = None,
    ) -> None:
        """Create an empty, unloaded mapping for *profile*.

        Args:
            profile: The profile's file name inside *base_dir*.
            base_dir: Directory that holds the backing stores.
            logger: Where load events are recorded (a private one if None).

        """
        self._profile = profile
        self._path = base_dir / profile
        self._name = str(self._path)
        self._atoms: set[Atom] = set()
        self._loaded = False
        self._logger = logger if logger is not None else Logger()

    @property
    def profile(self) -> str:
        """Return the short profile name."""
        return self._profile

    @property
    def name(self) -> str:
        """Return the display identity: the backing store path as text."""
        return self._name

    @property
    def path(self) -> Path:
        """Return the backing store location."""
        return self._path

    @property
    def atoms(self) -> frozenset[Atom]:
        """Return a read-only snapshot of the assigned atoms."""
        return frozenset(self._atoms)

    @property
    def loaded(self) -> bool:
        """Return True once a reload has completed successfully."""
        return self._loaded

    def contains(self, atom: Atom) -> bool:
        """Return True if an atom structurally equal to *atom* is assigned here."""
        return atom in self._atoms

    def add(self, atom: Atom) -> bool:
        """Assign *atom* in memory (nothing is written to the store).

        Returns:
            True if the atom was new, False if it was already present.

        """
        if atom in self._atoms:
            return False
        self._atoms.add(atom)
        return True

    def reload(self, *, strict: bool = True) -> int:
        """Read the backing store and merge its atoms into the set.

        A missing store is created empty first.  The store is fully read
        and closed before any atom is merged, so a failed reload leaves
        the set untouched.

        Args:
            strict: If True, one unparseable atom aborts the reload.  If
                False, the offending line is logged and skipped.

        Returns:
            How many atoms were not already in the set.

        Raises:
            MappingLoadError: If the store cannot be created, opened, or read.
            AtomParseError: In strict mode, if a line's atom is malformed.

        """
        with self._open_store() as store:
            try:
                lines = store.readlines()
            except (OSError, UnicodeDecodeError) as e:
                msg = f"Failed to read environment file '{self._name}': {e}"
                raise MappingLoadError(msg) from e

        parsed: list[Atom] = []
        for lineno, line in enumerate(lines, start=1):
            tokens = line.split()
            if not tokens:
                continue
            try:
                parsed.append(parse_atom(tokens[0]))
            except AtomParseError as e:
                if strict:
                    msg = f"{self._name}:{lineno}: {e}"
                    raise AtomParseError(msg) from e
                self._logger.log(
                    LogLevel.WARNING, f"skipping line {lineno}: {e}", source=self._name
                )

        added = sum(self.add(atom) for atom in parsed)
        self._loaded = True
        self._logger.log(
            LogLevel.INFO,
            f"loaded {len(parsed)} atoms ({added} new, {len(self._atoms)} total)",
            source=self._name,
        )
        return added

    def _open_store(self) -> IO[str]:
        """Open the backing store for reading, creating it empty if absent."""
        if not self._path.exists():
            try:
                self._path.touch()
            except OSError as e:
                msg = f"Failed to create environment file '{self._name}': {e}"
                raise MappingLoadError(msg) from e
            self._logger.log(LogLevel.INFO, "created empty store", source=self._name)
        try:
            return self._path.open(encoding="utf-8", newline="\n")
        except OSError as e:
            msg = f"Failed to open environment file '{self._name}': {e}"
            raise MappingLoadError(msg) from e

    def __contains__(self, atom: object) -> bool:
        """Support ``atom in mapping``."""
        return atom in self._atoms

    def __iter__(self) -> Iterator[Atom]:
        """Iterate over the assigned atoms (no particular order)."""
        return iter(frozenset(self._atoms))

    def __len__(self) -> int:
        """Return the number of assigned atoms."""
        return len(self._atoms)

    def __repr__(self) -> str:
        """Return a readable representation."""
        return f"EnvironmentMappingSet(name={self._name!r}, atoms={len(self._atoms)})"
