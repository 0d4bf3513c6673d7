"""Write generated configuration artifacts below ``GUACAMOLE_HOME``.

Purpose
    Implement the :class:`guacamole_bootstrap.application.ports.ArtifactWriter`
    port on the local filesystem.

Contents
    - ``FileArtifactWriter``: public adapter.
    - ``_write_text`` / ``_ensure_parent``: tiny helpers that narrate how files
      are written.

System Integration
    The driver calls :meth:`FileArtifactWriter.reset` first, then writes each
    document once. A crash halfway leaves a partial file; the next container
    start resets the home directory again.
"""

from __future__ import annotations

import shutil
from datetime import datetime
from pathlib import Path
from typing import Iterable

from ...application.connections import render_connection_list
from ...domain.backends import ConnectionRecord
from ...domain.layout import HomeLayout
from ...domain.properties import PropertyStore
from ...observability import log_debug, log_info


class FileArtifactWriter:
    """Filesystem implementation of the artifact writer port."""

    def reset(self, layout: HomeLayout) -> None:
        """Delete *layout.home* recursively and recreate ``extensions`` and ``lib``."""

        if layout.home.is_symlink() or layout.home.is_file():
            layout.home.unlink()
        elif layout.home.exists():
            shutil.rmtree(layout.home)
        layout.extensions.mkdir(parents=True, exist_ok=True)
        layout.lib.mkdir(parents=True, exist_ok=True)
        log_debug("home_reset", backend="home", path=str(layout.home))

    def write_properties(self, layout: HomeLayout, store: PropertyStore, generated_at: datetime) -> None:
        """Write ``guacamole.properties`` with a generation header."""

        _write_text(layout.properties, store.render(generated_at))
        log_info("properties_written", backend="home", path=str(layout.properties), entries=len(store))

    def write_connection_list(self, layout: HomeLayout, connections: Iterable[ConnectionRecord]) -> None:
        """Write ``noauth-config.xml``."""

        records = list(connections)
        _write_text(layout.noauth_config, render_connection_list(records) + "\n")
        log_info("connection_list_written", backend="noauth", path=str(layout.noauth_config), connections=len(records))


def _write_text(path: Path, text: str) -> None:
    """Create parent directories and write *text* to *path* as UTF-8."""

    _ensure_parent(path)
    path.write_text(text, encoding="utf-8")


def _ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
