"""Link packaged plugin archives into the Guacamole home directory.

Purpose
    Implement the :class:`guacamole_bootstrap.application.ports.PluginInstaller`
    port by symlinking the archives shipped under ``/opt/guacamole`` into
    ``extensions/`` (authentication extensions) and ``lib/`` (JDBC drivers).

Contents
    - ``DEFAULT_PLUGIN_ROOT``: where the image ships its archives.
    - ``SymlinkPluginInstaller``: public adapter.
    - ``_matches`` / ``_destination_dir`` / ``_link``: small helpers.
"""

from __future__ import annotations

from pathlib import Path
from typing import Final, Iterable

from ...domain.backends import PluginArtifact
from ...domain.errors import MissingPlugin
from ...domain.layout import HomeLayout
from ...observability import log_debug

DEFAULT_PLUGIN_ROOT: Final[Path] = Path("/opt/guacamole")

_DESTINATIONS: Final[frozenset[str]] = frozenset({"extensions", "lib"})


class SymlinkPluginInstaller:
    """Symlink every archive matching a backend's glob patterns."""

    def __init__(self, root: str | Path = DEFAULT_PLUGIN_ROOT) -> None:
        self.root = Path(root)

    def install(self, layout: HomeLayout, artifacts: Iterable[PluginArtifact]) -> list[str]:
        """Link the archives for *artifacts* and return the created link paths.

        Raises
        ------
        MissingPlugin
            When a pattern matches no file below :attr:`root`.
        """

        created: list[str] = []
        for artifact in artifacts:
            target_dir = _destination_dir(layout, artifact)
            matches = _matches(self.root, artifact.pattern)
            if not matches:
                raise MissingPlugin(
                    f"Missing plugin archive {artifact.pattern}",
                    f"No file below {self.root} matches {artifact.pattern}. The image\n"
                    "does not ship the archive required by the selected authentication\n"
                    "backend.",
                )
            for source in matches:
                link = target_dir / source.name
                if _link(source, link):
                    created.append(str(link))
        return created


def _matches(root: Path, pattern: str) -> list[Path]:
    return sorted(path for path in root.glob(pattern) if path.is_file())


def _destination_dir(layout: HomeLayout, artifact: PluginArtifact) -> Path:
    if artifact.destination not in _DESTINATIONS:
        raise ValueError(f"Unsupported plugin destination: {artifact.destination}")
    return layout.extensions if artifact.destination == "extensions" else layout.lib


def _link(source: Path, link: Path) -> bool:
    """Create *link* pointing at *source*; return ``False`` if it already does."""

    if link.is_symlink() and link.resolve() == source.resolve():
        return False
    link.parent.mkdir(parents=True, exist_ok=True)
    link.symlink_to(source)
    log_debug("plugin_linked", backend="plugins", path=str(link), source=str(source))
    return True
