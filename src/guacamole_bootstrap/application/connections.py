"""No-auth connection list builder.

Purpose
    Turn the parallel ``NOAUTH_*`` lists into connection records and serialise
    them to the XML document read by the noauth extension.

Contents
    - ``split_list``: splits a comma/whitespace delimited variable.
    - ``zip_with_default``: positional zip padded to the length of the first
      sequence.
    - ``build_connections``: assembles :class:`ConnectionRecord` values.
    - ``render_connection_list``: serialises records below a ``<configs>`` root.

System Integration
    Used by :func:`guacamole_bootstrap.application.resolvers.resolve_noauth` and
    by the driver when it writes ``noauth-config.xml``.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from typing import Iterable, Sequence

from ..domain.backends import ConnectionRecord

_DELIMITER = re.compile(r"\s*,\s*|\s+")


def split_list(raw: str | None) -> list[str]:
    """Split *raw* on commas and whitespace.

    Runs of whitespace count as one delimiter. An empty item between two commas
    is kept so later lists stay aligned with the hosts list; a trailing comma
    does not add an item.

    Examples
    --------
    >>> split_list("a, b  c")
    ['a', 'b', 'c']
    >>> split_list("u1,,u3,")
    ['u1', '', 'u3']
    >>> split_list("   ")
    []
    """

    text = (raw or "").strip()
    if not text:
        return []
    items = _DELIMITER.split(text)
    if text.endswith(",") and items and items[-1] == "":
        items.pop()
    return items


def zip_with_default(
    keys: Sequence[str],
    *columns: Sequence[str],
    default: str = "",
) -> list[tuple[str, ...]]:
    """Zip *columns* against *keys*, padding short columns with *default*.

    The result always has ``len(keys)`` rows; entries of longer columns beyond
    that length are dropped. Padding is deliberate: a connection may simply
    have no username.

    Examples
    --------
    >>> zip_with_default(["a", "b", "c"], ["u1"], [])
    [('a', 'u1', ''), ('b', '', ''), ('c', '', '')]
    """

    rows: list[tuple[str, ...]] = []
    for index, key in enumerate(keys):
        row = [key]
        row.extend(column[index] if index < len(column) else default for column in columns)
        rows.append(tuple(row))
    return rows


def build_connections(
    hosts: Sequence[str],
    *,
    usernames: Sequence[str] = (),
    passwords: Sequence[str] = (),
    remote_apps: Sequence[str] = (),
    security: str = "",
    ignore_cert: str = "",
) -> tuple[ConnectionRecord, ...]:
    """Return one :class:`ConnectionRecord` per host, in host order."""

    rows = zip_with_default(hosts, usernames, passwords, remote_apps)
    return tuple(
        ConnectionRecord(
            index=index,
            hostname=hostname,
            username=username,
            password=password,
            remote_app=remote_app,
            security=security,
            ignore_cert=ignore_cert,
        )
        for index, (hostname, username, password, remote_app) in enumerate(rows)
    )


def render_connection_list(connections: Iterable[ConnectionRecord]) -> str:
    """Serialise *connections* into the noauth XML document.

    Examples
    --------
    >>> print(render_connection_list([]))
    <configs />
    """

    root = ET.Element("configs")
    for record in connections:
        config = ET.SubElement(root, "config", {"name": str(record.index), "protocol": record.protocol})
        for name, value in record.parameters():
            ET.SubElement(config, "param", {"name": name, "value": value})
    ET.indent(root)
    return ET.tostring(root, encoding="unicode")
