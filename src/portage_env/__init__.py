"""Portage environment mappings — per-package ``package.env`` management.

Re-exports the public symbols so callers can write::

    from portage_env import Atom, EnvironmentMappingSet, parse_atom
"""

from portage_env.atom import Atom, AtomParseError, VersionConstraint, VersionOperator, parse_atom
from portage_env.config import Settings
from portage_env.mapping import EnvironmentMappingSet, MappingLoadError
from portage_env.registry import AtomConflictError, MappingRegistry, list_profile_names
from portage_env.world import WorldSet, in_world_set

__all__ = [
    "Atom",
    "AtomConflictError",
    "AtomParseError",
    "EnvironmentMappingSet",
    "MappingLoadError",
    "MappingRegistry",
    "Settings",
    "VersionConstraint",
    "VersionOperator",
    "WorldSet",
    "in_world_set",
    "list_profile_names",
    "parse_atom",
]
