"""Environment variable adapter.

Purpose
-------
Capture the process environment into an
:class:`~guacamole_bootstrap.domain.environment.EnvironmentSnapshot` exactly
once, implementing the :class:`guacamole_bootstrap.application.ports.EnvLoader`
port.

Key behaviours
--------------
* Reads :data:`os.environ` unless a mapping is injected (tests, ``render``).
* Never mutates the source mapping; later changes are not observed.
* Emits a debug event listing the recognised variable families, never values.
"""

from __future__ import annotations

import os
from typing import Final, Mapping

from ...domain.environment import EnvironmentSnapshot
from ...observability import log_debug

RECOGNISED_PREFIXES: Final[tuple[str, ...]] = (
    "GUACD_",
    "MYSQL_",
    "POSTGRES_",
    "LDAP_",
    "HMAC_",
    "ENCRYPTEDURL_",
    "NOAUTH_",
)
"""Variable families the resolvers read; used for diagnostics only."""


class DefaultEnvLoader:
    """Load environment variables into an immutable snapshot."""

    def __init__(self, *, environ: Mapping[str, str] | None = None) -> None:
        """Initialise the loader with a specific ``environ`` mapping for testability.

        Parameters
        ----------
        environ:
            Mapping to read from. Defaults to :data:`os.environ`.
        """

        self._environ = os.environ if environ is None else environ

    def load(self) -> EnvironmentSnapshot:
        """Return a snapshot of the configured mapping.

        Examples
        --------
        >>> snapshot = DefaultEnvLoader(environ={"HMAC_SECRET": "s3cr3t"}).load()
        >>> snapshot.value("HMAC_SECRET")
        's3cr3t'
        """

        snapshot = EnvironmentSnapshot(dict(self._environ))
        log_debug("environment_loaded", backend="env", path=None, families=recognised_families(snapshot))
        return snapshot


def recognised_families(variables: Mapping[str, str]) -> list[str]:
    """Return the recognised prefixes that have at least one non-empty variable.

    Examples
    --------
    >>> recognised_families({"MYSQL_DATABASE": "guac", "LDAP_PORT": "", "PATH": "/bin"})
    ['MYSQL_']
    """

    return [
        prefix
        for prefix in RECOGNISED_PREFIXES
        if any(key.startswith(prefix) and value for key, value in variables.items())
    ]
