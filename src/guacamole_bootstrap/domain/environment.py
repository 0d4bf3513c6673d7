"""Immutable snapshot of the container environment.

Purpose
-------
Carry the process environment through the system as an explicit value so every
resolver is a function of its input rather than of ``os.environ``. The module
belongs to the domain layer and performs no I/O.

Contents
--------
* :class:`EnvironmentSnapshot` – read-only ``Mapping`` with helpers for trigger
  checks, parameter lookups and Docker link conventions.
* :func:`link_variable` – builds ``<ALIAS>_PORT_<PORT>_TCP_<FIELD>`` names.

System Role
-----------
Built once by :class:`guacamole_bootstrap.adapters.env.default.DefaultEnvLoader`
and handed to the guacd resolver, the backend selector and every backend
resolver.
"""

from __future__ import annotations

from collections.abc import Mapping as MappingABC
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterator, Mapping


def link_variable(alias: str, port: int, field: str) -> str:
    """Return the variable name Docker uses to publish a linked container's address.

    Examples
    --------
    >>> link_variable("mysql", 3306, "addr")
    'MYSQL_PORT_3306_TCP_ADDR'
    """

    return f"{alias.upper()}_PORT_{port}_TCP_{field.upper()}"


@dataclass(frozen=True, slots=True)
class EnvironmentSnapshot(MappingABC[str, str]):
    """Read-only view of the environment variables captured at start-up.

    Why
    ----
    Resolvers must be testable with synthetic inputs and must never observe
    variables changing halfway through a run.

    What
    ----
    Wraps the supplied mapping in ``MappingProxyType``. A variable is considered
    *set* only when its value is non-empty; :meth:`value` returns ``""`` for
    anything unset so callers never juggle ``None``.

    Examples
    --------
    >>> env = EnvironmentSnapshot({"MYSQL_DATABASE": "guac", "MYSQL_PORT": ""})
    >>> env.is_set("MYSQL_DATABASE"), env.is_set("MYSQL_PORT")
    (True, False)
    >>> env.value("MYSQL_USER", "root")
    'root'
    """

    _values: Mapping[str, str]

    def __post_init__(self) -> None:
        object.__setattr__(self, "_values", MappingProxyType(dict(self._values)))

    def __getitem__(self, key: str) -> str:
        return self._values[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def is_set(self, name: str) -> bool:
        """Return ``True`` when *name* exists and holds a non-empty value."""

        return bool(self._values.get(name))

    def value(self, name: str, default: str = "") -> str:
        """Return the value of *name*, or *default* when it is unset or empty."""

        found = self._values.get(name)
        return found if found else default

    def link(self, alias: str, port: int) -> tuple[str, str]:
        """Return the ``(address, port)`` published for a linked container.

        Parameters
        ----------
        alias:
            Link name given to ``docker run --link`` (``"mysql"``, ``"guacd"``).
        port:
            Port exposed by the linked image; it is part of the variable name.

        Examples
        --------
        >>> env = EnvironmentSnapshot({"GUACD_PORT_4822_TCP_ADDR": "10.0.0.2", "GUACD_PORT_4822_TCP_PORT": "4822"})
        >>> env.link("guacd", 4822)
        ('10.0.0.2', '4822')
        """

        return (
            self.value(link_variable(alias, port, "addr")),
            self.value(link_variable(alias, port, "port")),
        )
