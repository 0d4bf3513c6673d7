"""Filesystem layout of the Guacamole configuration home.

Purpose
-------
Derive every path the bootstrap writes to from a single home directory so the
driver, writers and plugin installer agree on locations.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .properties import PROPERTIES_FILENAME

NOAUTH_CONFIG_FILENAME = "noauth-config.xml"


def default_home() -> Path:
    """Return ``$HOME/.guacamole``, the location Guacamole searches by default."""

    return Path.home() / ".guacamole"


@dataclass(frozen=True, slots=True)
class HomeLayout:
    """Paths below ``GUACAMOLE_HOME``.

    Examples
    --------
    >>> layout = HomeLayout(Path("/root/.guacamole"))
    >>> str(layout.extensions), str(layout.noauth_config)
    ('/root/.guacamole/extensions', '/root/.guacamole/noauth-config.xml')
    """

    home: Path

    @property
    def extensions(self) -> Path:
        return self.home / "extensions"

    @property
    def lib(self) -> Path:
        return self.home / "lib"

    @property
    def properties(self) -> Path:
        return self.home / PROPERTIES_FILENAME

    @property
    def noauth_config(self) -> Path:
        return self.home / NOAUTH_CONFIG_FILENAME
