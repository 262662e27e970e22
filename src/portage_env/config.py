"""Runtime configuration — where the environment mappings live.

Portage keeps per-package environment assignments in
``/etc/portage/package.env`` and the list of explicitly installed
packages in ``/var/lib/portage/world``.  Those paths are defaults only:
every class that touches the filesystem receives them as arguments, so
tests (and chroots) can point the tool somewhere else.

Resolution order, lowest to highest priority:
    1. The built-in defaults below.
    2. ``EPENV_CONFIG_DIR`` / ``EPENV_WORLD_FILE`` in the environment.
    3. Explicit overrides (e.g. ``--config-dir`` on the command line).
"""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path

DEFAULT_CONFIG_DIR = Path("/etc/portage/package.env")
DEFAULT_WORLD_FILE = Path("/var/lib/portage/world")

CONFIG_DIR_VAR = "EPENV_CONFIG_DIR"
WORLD_FILE_VAR = "EPENV_WORLD_FILE"


@dataclass(frozen=True)
class Settings:
    """Filesystem locations used by the tool.

    Attributes:
        config_dir: Directory holding one backing store per profile.
        world_file: The world set (one ``category/package`` per line).

    """

    config_dir: Path = DEFAULT_CONFIG_DIR
    world_file: Path = DEFAULT_WORLD_FILE

    @classmethod
    def from_environ(cls, environ: Mapping[str, str]) -> "Settings":
        """Build settings from environment variables, falling back to defaults."""
        config_dir = environ.get(CONFIG_DIR_VAR)
        world_file = environ.get(WORLD_FILE_VAR)
        return cls(
            config_dir=Path(config_dir) if config_dir else DEFAULT_CONFIG_DIR,
            world_file=Path(world_file) if world_file else DEFAULT_WORLD_FILE,
        )

    def override(
        self,
        *,
        config_dir: Path | None = None,
        world_file: Path | None = None,
    ) -> "Settings":
        """Return a copy with any non-None argument replacing the current value."""
        changes: dict[str, Path] = {}
        if config_dir is not None:
            changes["config_dir"] = config_dir
        if world_file is not None:
            changes["world_file"] = world_file
        return replace(self, **changes)
