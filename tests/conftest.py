"""Shared fixtures: a guacd-linked environment, a fake plugin tree, a home layout."""

from __future__ import annotations

from pathlib import Path

import pytest

from guacamole_bootstrap.domain.environment import EnvironmentSnapshot
from guacamole_bootstrap.domain.layout import HomeLayout

GUACD_LINK = {
    "GUACD_PORT_4822_TCP_ADDR": "172.17.0.2",
    "GUACD_PORT_4822_TCP_PORT": "4822",
}

PACKAGED_ARCHIVES = (
    "mysql/mysql-connector-java-5.1.35-bin.jar",
    "mysql/guacamole-auth-jdbc-mysql-0.9.7.jar",
    "postgresql/postgresql-9.4-1201.jdbc41.jar",
    "postgresql/guacamole-auth-jdbc-postgresql-0.9.7.jar",
    "ldap/guacamole-auth-ldap-0.9.7.jar",
    "hmac/guacamole-auth-hmac-1.0.jar",
    "encryptedurl/guacamole-auth-encryptedurl-1.0.jar",
    "noauth/guacamole-auth-noauth-0.9.7.jar",
)


def _snapshot(**variables: str) -> EnvironmentSnapshot:
    return EnvironmentSnapshot({**GUACD_LINK, **variables})


@pytest.fixture()
def make_env():
    """Return a factory building a guacd-linked snapshot plus the given variables."""

    return _snapshot


@pytest.fixture()
def layout(tmp_path: Path) -> HomeLayout:
    return HomeLayout(tmp_path / "home" / ".guacamole")


@pytest.fixture()
def plugin_root(tmp_path: Path) -> Path:
    """Create empty stand-ins for every archive the image ships."""

    root = tmp_path / "opt" / "guacamole"
    for relative in PACKAGED_ARCHIVES:
        archive = root / relative
        archive.parent.mkdir(parents=True, exist_ok=True)
        archive.write_bytes(b"PK")
    return root
