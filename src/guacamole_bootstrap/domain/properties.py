"""Append-only store for ``guacamole.properties`` entries.

Purpose
-------
Accumulate the ``name: value`` pairs destined for ``guacamole.properties`` in
the order resolvers produce them and render the final document exactly once.

Contents
--------
* :class:`PropertyEntry` – a single ``(name, value)`` pair.
* :class:`PropertyStore` – ordered sink exposing ``set`` / ``set_if_present``.
* :func:`format_timestamp` – ``date(1)``-style timestamp used in the header.

System Role
-----------
Owned by :func:`guacamole_bootstrap.core.plan_bootstrap`; resolvers and backend
descriptors write into it through the handle they are given. The store does
not deduplicate: Guacamole reads the file line by line so the last entry with a
given name wins.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterator, NamedTuple

PROPERTIES_FILENAME = "guacamole.properties"


class PropertyEntry(NamedTuple):
    """One line of ``guacamole.properties``."""

    name: str
    value: str

    def render(self) -> str:
        return f"{self.name}: {self.value}"


class PropertyStore:
    """Ordered, append-only collection of :class:`PropertyEntry` values.

    Examples
    --------
    >>> store = PropertyStore()
    >>> store.set("guacd-port", "4822")
    >>> store.set_if_present("ldap-port", "")
    >>> [entry.render() for entry in store]
    ['guacd-port: 4822']
    """

    def __init__(self) -> None:
        self._entries: list[PropertyEntry] = []

    def set(self, name: str, value: str) -> None:
        """Append ``name: value`` unconditionally."""

        self._entries.append(PropertyEntry(name, value))

    def set_if_present(self, name: str, value: str | None) -> None:
        """Append ``name: value`` only when *value* is non-empty."""

        if value:
            self.set(name, value)

    @property
    def entries(self) -> tuple[PropertyEntry, ...]:
        return tuple(self._entries)

    def names(self) -> list[str]:
        return [entry.name for entry in self._entries]

    def __iter__(self) -> Iterator[PropertyEntry]:
        return iter(tuple(self._entries))

    def __len__(self) -> int:
        return len(self._entries)

    def render(self, generated_at: datetime) -> str:
        """Return the file body: a header comment followed by one line per entry.

        Examples
        --------
        >>> store = PropertyStore()
        >>> store.set("guacd-hostname", "guacd")
        >>> print(store.render(datetime(2015, 6, 1, 12, 0, 0)), end="")
        # guacamole.properties - generated Mon Jun  1 12:00:00 2015
        guacd-hostname: guacd
        """

        lines = [f"# {PROPERTIES_FILENAME} - generated {format_timestamp(generated_at)}"]
        lines.extend(entry.render() for entry in self._entries)
        return "\n".join(lines) + "\n"


def format_timestamp(moment: datetime) -> str:
    """Format *moment* the way ``date`` prints it, omitting the zone when naive.

    Examples
    --------
    >>> format_timestamp(datetime(2015, 6, 1, 12, 0, 0))
    'Mon Jun  1 12:00:00 2015'
    """

    zone = moment.strftime("%Z")
    fields = [moment.strftime("%a %b"), f"{moment.day:>2}", moment.strftime("%H:%M:%S")]
    if zone:
        fields.append(zone)
    fields.append(str(moment.year))
    return " ".join(fields)
