"""Mapping registry — every profile in the configuration directory.

The registry discovers one profile per regular file in the
configuration directory, loads each into an ``EnvironmentMappingSet``,
and enforces the rule that ties them together:

    **An atom may be assigned to at most one environment profile.**

The mapping sets themselves do not know about each other, so the rule
is checked here by asking every mapping before a new assignment is
accepted.
"""

from collections.abc import Iterable, Iterator
from pathlib import Path

from portage_env.atom import Atom
from portage_env.logging import Logger, LogLevel
from portage_env.mapping import EnvironmentMappingSet, MappingLoadError

_SOURCE = "registry"


class AtomConflictError(Exception):
    """Raised when an atom is already assigned to another mapping."""

    def __init__(self, atom: Atom, mapping: EnvironmentMappingSet) -> None:
        """Record the atom and the mapping that already holds it."""
        self.atom = atom
        self.mapping = mapping
        super().__init__(
            f"Atom '{atom}' already exists in environment mapping '{mapping.name}'"
        )


def list_profile_names(base_dir: Path) -> list[str]:
    """Return the names of non-directory entries in *base_dir*, sorted.

    Raises:
        MappingLoadError: If the directory cannot be listed.

    """
    try:
        entries = sorted(base_dir.iterdir())
    except OSError as e:
        msg = f"Failed to read environment directory '{base_dir}': {e}"
        raise MappingLoadError(msg) from e
    return [entry.name for entry in entries if not entry.is_dir()]


class MappingRegistry:
    """An ordered collection of environment mappings."""

    def __init__(
        self,
        mappings: Iterable[EnvironmentMappingSet] = (),
        *,
        logger: Logger | None = None,
    ) -> None:
        """Create a registry over already-constructed mappings."""
        self._mappings = list(mappings)
        self._logger = logger if logger is not None else Logger()

    @classmethod
    def load(
        cls,
        base_dir: Path,
        *,
        strict: bool = True,
        logger: Logger | None = None,
    ) -> "MappingRegistry":
        """Discover and reload every profile under *base_dir*.

        Any failure is fatal: the first mapping that cannot be loaded
        aborts the whole load.

        Args:
            base_dir: The configuration directory.
            strict: Passed to each ``reload()``.
            logger: Shared logger for the registry and its mappings.

        Returns:
            A registry whose mappings are all loaded.

        Raises:
            MappingLoadError: If the directory or a store cannot be read.
            AtomParseError: In strict mode, if a store holds a malformed atom.

        """
        logger = logger if logger is not None else Logger()
        mappings = [
            EnvironmentMappingSet(profile, base_dir=base_dir, logger=logger)
            for profile in list_profile_names(base_dir)
        ]
        for mapping in mappings:
            mapping.reload(strict=strict)
        logger.log(
            LogLevel.INFO, f"loaded {len(mappings)} mappings from {base_dir}", source=_SOURCE
        )
        return cls(mappings, logger=logger)

    @property
    def mappings(self) -> list[EnvironmentMappingSet]:
        """Return the mappings in discovery order."""
        return list(self._mappings)

    @property
    def logger(self) -> Logger:
        """Return the logger shared with the mappings."""
        return self._logger

    def get(self, profile: str) -> EnvironmentMappingSet | None:
        """Look up a mapping by its short profile name."""
        for mapping in self._mappings:
            if mapping.profile == profile:
                return mapping
        return None

    def find_conflict(self, atom: Atom) -> EnvironmentMappingSet | None:
        """Return the first mapping that already holds *atom*, or None."""
        for mapping in self._mappings:
            if mapping.contains(atom):
                return mapping
        return None

    def check_unique(self, atom: Atom) -> None:
        """Ensure *atom* is not assigned to any mapping yet.

        Raises:
            AtomConflictError: If some mapping already holds the atom.

        """
        conflict = self.find_conflict(atom)
        if conflict is not None:
            self._logger.log(
                LogLevel.ERROR, f"conflict for '{atom}' in {conflict.name}", source=_SOURCE
            )
            raise AtomConflictError(atom, conflict)

    def summary(self) -> list[tuple[str, int]]:
        """Return ``(name, atom count)`` for each mapping."""
        return [(mapping.name, len(mapping)) for mapping in self._mappings]

    def __iter__(self) -> Iterator[EnvironmentMappingSet]:
        """Iterate over the mappings in discovery order."""
        return iter(self._mappings)

    def __len__(self) -> int:
        """Return the number of mappings."""
        return len(self._mappings)
