"""Domain-level exception hierarchy.

Purpose
-------
Expose the fatal error taxonomy shared by resolvers, adapters and the CLI. The
hierarchy lives in the domain layer so resolvers can raise typed failures
without knowing how (or whether) the process terminates.

Contents
--------
* :class:`BootstrapError` – umbrella base class carrying an operator banner.
* :class:`MissingLink` – a linked container (or explicit host/port) is absent.
* :class:`MissingRequiredField` – a backend-specific mandatory variable is absent.
* :class:`NoBackendInstalled` – no authentication backend was selected.
* :class:`MissingPlugin` – a packaged plugin archive could not be located.

System Role
-----------
Resolvers raise these exceptions; :mod:`guacamole_bootstrap.cli` renders the
first one to standard output and exits with status ``1``. Nothing in the
package retries or recovers: every error is fatal for the run.
"""

from __future__ import annotations

from typing import Final

SEPARATOR: Final[str] = "-" * 79
"""Rule printed between the ``FATAL`` line and the explanation."""


class BootstrapError(Exception):
    """Base type for every fatal condition detected during bootstrap.

    Why
    ----
    Operators fix configuration problems by reading the container log, so each
    failure must explain which variables to set, not only what went wrong.

    What
    ----
    Stores a short ``reason`` (used as the exception message) and a multi-line
    ``explanation``. :meth:`render` joins both into the banner format.

    Examples
    --------
    >>> error = BootstrapError("Missing thing", "Set THING.")
    >>> print(error.render())
    FATAL: Missing thing
    -------------------------------------------------------------------------------
    Set THING.
    """

    def __init__(self, reason: str, explanation: str = "") -> None:
        super().__init__(reason)
        self.reason = reason
        self.explanation = explanation

    def render(self) -> str:
        """Return the ``FATAL`` banner shown to operators."""

        lines = [f"FATAL: {self.reason}", SEPARATOR]
        if self.explanation:
            lines.append(self.explanation.rstrip("\n"))
        return "\n".join(lines)


class MissingLink(BootstrapError):
    """Raised when a linked container or its explicit host/port pair is absent."""


class MissingRequiredField(BootstrapError):
    """Raised when a selected backend lacks one of its mandatory variables."""


class NoBackendInstalled(BootstrapError):
    """Raised after selection when no authentication backend was enabled."""


class MissingPlugin(BootstrapError):
    """Raised when a backend's packaged archive matches no file on disk."""
