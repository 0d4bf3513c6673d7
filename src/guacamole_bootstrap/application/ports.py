"""Application-layer ports describing adapter responsibilities.

Purpose
-------
Define the structural contracts for the side effects of a bootstrap run so the
driver can be exercised without a real container filesystem or Tomcat.

Contents
--------
* :class:`EnvLoader` – captures the process environment as a snapshot.
* :class:`ArtifactWriter` – resets the home directory and writes documents.
* :class:`PluginInstaller` – links packaged archives into the home directory.
* :class:`Launcher` – hands the process over to the application server.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, NoReturn, Protocol

from ..domain.backends import ConnectionRecord, PluginArtifact
from ..domain.environment import EnvironmentSnapshot
from ..domain.layout import HomeLayout
from ..domain.properties import PropertyStore


class EnvLoader(Protocol):
    """Capture environment variables once at start-up."""

    def load(self) -> EnvironmentSnapshot:
        """Return an immutable snapshot of the current environment."""


class ArtifactWriter(Protocol):
    """Persist the generated configuration below ``GUACAMOLE_HOME``."""

    def reset(self, layout: HomeLayout) -> None:
        """Remove the home directory and recreate ``extensions`` and ``lib``."""

    def write_properties(self, layout: HomeLayout, store: PropertyStore, generated_at: datetime) -> None:
        """Write ``guacamole.properties``."""

    def write_connection_list(self, layout: HomeLayout, connections: Iterable[ConnectionRecord]) -> None:
        """Write ``noauth-config.xml``."""


class PluginInstaller(Protocol):
    """Make a backend's archives visible to the web application."""

    def install(self, layout: HomeLayout, artifacts: Iterable[PluginArtifact]) -> list[str]:
        """Link every artifact and return the created link paths."""


class Launcher(Protocol):
    """Replace the current process with the application server."""

    def launch(self) -> NoReturn:
        """Never returns on success."""
