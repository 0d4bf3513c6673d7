"""Validated authentication backend descriptors.

Purpose
-------
Model each authentication backend as a small immutable record produced by a
resolver after validation. The union :data:`Backend` is closed: the selector
only ever returns one of the six variants defined here.

Contents
--------
* :class:`BackendKind` – the backend descriptors, in priority order.
* :class:`PluginArtifact` – glob pattern for a packaged ``.jar`` and its
  destination directory.
* :class:`GuacdLink` – address of the mandatory ``guacd`` daemon.
* :class:`DatabaseBackend` with :class:`MysqlBackend` / :class:`PostgresqlBackend`.
* :class:`LdapBackend`, :class:`HmacBackend`, :class:`EncryptedUrlBackend`.
* :class:`ConnectionRecord` and :class:`NoAuthBackend`.

System Role
-----------
Every variant knows how to write its properties (:meth:`emit`) and which plugin
archives it needs (:attr:`plugins`). Nothing here reads the environment or
touches the filesystem.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import ClassVar, Union

from .properties import PropertyStore

DEFAULT_RDP_PORT = "3389"
RDP_PROTOCOL = "rdp"


class BackendKind(str, Enum):
    """Backend descriptors in the order the selector evaluates them."""

    MYSQL = "mysql"
    POSTGRESQL = "postgresql"
    LDAP = "ldap"
    HMAC = "hmac"
    ENCRYPTEDURL = "encryptedurl"
    NOAUTH = "noauth"


@dataclass(frozen=True, slots=True)
class PluginArtifact:
    """A packaged archive, located by *pattern* below the plugin root.

    ``destination`` is either ``"extensions"`` or ``"lib"``.
    """

    pattern: str
    destination: str


def _extension(kind: BackendKind) -> PluginArtifact:
    return PluginArtifact(f"{kind.value}/guacamole-auth-*.jar", "extensions")


PLUGINS: dict[BackendKind, tuple[PluginArtifact, ...]] = {
    BackendKind.MYSQL: (
        PluginArtifact("mysql/mysql-connector-*.jar", "lib"),
        _extension(BackendKind.MYSQL),
    ),
    BackendKind.POSTGRESQL: (
        PluginArtifact("postgresql/postgresql-*.jar", "lib"),
        _extension(BackendKind.POSTGRESQL),
    ),
    BackendKind.LDAP: (_extension(BackendKind.LDAP),),
    BackendKind.HMAC: (_extension(BackendKind.HMAC),),
    BackendKind.ENCRYPTEDURL: (_extension(BackendKind.ENCRYPTEDURL),),
    BackendKind.NOAUTH: (_extension(BackendKind.NOAUTH),),
}


@dataclass(frozen=True, slots=True)
class GuacdLink:
    """Where the web application reaches ``guacd``."""

    hostname: str
    port: str

    def emit(self, store: PropertyStore) -> None:
        store.set("guacd-hostname", self.hostname)
        store.set("guacd-port", self.port)


class _Backend:
    """Shared behaviour of backend descriptors."""

    __slots__ = ()

    kind: ClassVar[BackendKind]

    @property
    def plugins(self) -> tuple[PluginArtifact, ...]:
        return PLUGINS[self.kind]

    def emit(self, store: PropertyStore) -> None:  # pragma: no cover - overridden
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class DatabaseBackend(_Backend):
    """Connection settings shared by the JDBC backends.

    ``tunables`` holds the optional connection-pool limits as ``(suffix, value)``
    pairs; empty values are kept here and filtered on emission.
    """

    property_prefix: ClassVar[str]

    hostname: str
    port: str
    database: str
    username: str
    password: str = field(repr=False)
    tunables: tuple[tuple[str, str], ...] = ()

    def emit(self, store: PropertyStore) -> None:
        prefix = self.property_prefix
        store.set(f"{prefix}-hostname", self.hostname)
        store.set(f"{prefix}-port", self.port)
        store.set(f"{prefix}-database", self.database)
        store.set(f"{prefix}-username", self.username)
        store.set(f"{prefix}-password", self.password)
        for suffix, value in self.tunables:
            store.set_if_present(f"{prefix}-{suffix}", value)


@dataclass(frozen=True, slots=True)
class MysqlBackend(DatabaseBackend):
    kind: ClassVar[BackendKind] = BackendKind.MYSQL
    property_prefix: ClassVar[str] = "mysql"


@dataclass(frozen=True, slots=True)
class PostgresqlBackend(DatabaseBackend):
    kind: ClassVar[BackendKind] = BackendKind.POSTGRESQL
    property_prefix: ClassVar[str] = "postgresql"


@dataclass(frozen=True, slots=True)
class LdapBackend(_Backend):
    """LDAP directory settings; only the hostname and user base DN are mandatory."""

    kind: ClassVar[BackendKind] = BackendKind.LDAP

    hostname: str
    user_base_dn: str
    port: str = ""
    encryption_method: str = ""
    username_attribute: str = ""
    group_base_dn: str = ""
    config_base_dn: str = ""
    search_bind_dn: str = ""
    search_bind_password: str = field(default="", repr=False)

    def emit(self, store: PropertyStore) -> None:
        store.set("ldap-hostname", self.hostname)
        store.set_if_present("ldap-port", self.port)
        store.set_if_present("ldap-encryption-method", self.encryption_method)
        store.set("ldap-user-base-dn", self.user_base_dn)
        store.set_if_present("ldap-username-attribute", self.username_attribute)
        store.set_if_present("ldap-group-base-dn", self.group_base_dn)
        store.set_if_present("ldap-config-base-dn", self.config_base_dn)
        store.set_if_present("ldap-search-bind-dn", self.search_bind_dn)
        store.set_if_present("ldap-search-bind-password", self.search_bind_password)


@dataclass(frozen=True, slots=True)
class _SharedSecretBackend(_Backend):
    """Token backends signing requests with a shared secret."""

    secret: str = field(repr=False)
    timestamp_age_limit: str

    def emit(self, store: PropertyStore) -> None:
        store.set("secret-key", self.secret)
        store.set("timestamp-age-limit", self.timestamp_age_limit)


@dataclass(frozen=True, slots=True)
class HmacBackend(_SharedSecretBackend):
    kind: ClassVar[BackendKind] = BackendKind.HMAC


@dataclass(frozen=True, slots=True)
class EncryptedUrlBackend(_SharedSecretBackend):
    kind: ClassVar[BackendKind] = BackendKind.ENCRYPTEDURL


@dataclass(frozen=True, slots=True)
class ConnectionRecord:
    """One RDP connection offered without authentication."""

    index: int
    hostname: str
    username: str = ""
    password: str = field(default="", repr=False)
    remote_app: str = ""
    security: str = ""
    ignore_cert: str = ""
    port: str = DEFAULT_RDP_PORT
    protocol: str = RDP_PROTOCOL

    def parameters(self) -> list[tuple[str, str]]:
        """Return the ``<param>`` entries in document order."""

        return [
            ("hostname", self.hostname),
            ("port", self.port),
            ("username", self.username),
            ("password", self.password),
            ("remote-app", self.remote_app),
            ("security", self.security),
            ("ignore-cert", self.ignore_cert),
        ]


@dataclass(frozen=True, slots=True)
class NoAuthBackend(_Backend):
    """Fixed list of RDP connections served by the noauth extension.

    ``config_path`` is where the connection-list document will be written; it
    is the only value recorded in ``guacamole.properties``.
    """

    kind: ClassVar[BackendKind] = BackendKind.NOAUTH

    connections: tuple[ConnectionRecord, ...]
    config_path: Path

    def emit(self, store: PropertyStore) -> None:
        store.set("noauth-config", str(self.config_path))


Backend = Union[
    MysqlBackend,
    PostgresqlBackend,
    LdapBackend,
    HmacBackend,
    EncryptedUrlBackend,
    NoAuthBackend,
]
"""Closed set of backend descriptors returned by the selector."""
