"""Backend resolvers.

Purpose
-------
Validate the environment for one backend at a time and return the matching
descriptor from :mod:`guacamole_bootstrap.domain.backends`. Resolvers are pure
functions of the :class:`EnvironmentSnapshot`; they raise a
:class:`~guacamole_bootstrap.domain.errors.BootstrapError` subclass instead of
terminating the process.

Contents
--------
* :func:`resolve_guacd` – mandatory ``guacd`` link.
* :func:`resolve_mysql` / :func:`resolve_postgresql` – JDBC backends.
* :func:`resolve_ldap` – LDAP directory.
* :func:`resolve_hmac` / :func:`resolve_encryptedurl` – shared-secret tokens.
* :func:`resolve_noauth` – fixed RDP connection list.

System Role
-----------
Invoked by :func:`guacamole_bootstrap.application.selector.select_backends`
(and by :func:`guacamole_bootstrap.core.plan_bootstrap` for guacd). The
explanatory texts below are printed verbatim to operators.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from textwrap import dedent
from typing import Final

from ..domain.backends import (
    EncryptedUrlBackend,
    GuacdLink,
    HmacBackend,
    LdapBackend,
    MysqlBackend,
    NoAuthBackend,
    PostgresqlBackend,
)
from ..domain.environment import EnvironmentSnapshot
from ..domain.errors import MissingLink, MissingRequiredField
from ..observability import log_debug, make_event
from .connections import build_connections, split_list

DEFAULT_TIMESTAMP_AGE_LIMIT: Final[str] = "600000"

TUNABLES: Final[tuple[str, ...]] = (
    "absolute-max-connections",
    "default-max-connections",
    "default-max-group-connections",
    "default-max-connections-per-user",
    "default-max-group-connections-per-user",
)
"""Optional connection-pool limits accepted by both JDBC backends."""

MISSING_REQUIRED: Final[str] = "Missing required environment variables"

GUACD_EXPLANATION: Final[str] = dedent(
    """\
    Every Guacamole instance needs a corresponding copy of guacd running. Link a
    container to the link named "guacd" to provide this.
    """
)

LDAP_EXPLANATION: Final[str] = dedent(
    """\
    If using an LDAP directory, you must provide each of the following environment
    variables:

        LDAP_HOSTNAME      The hostname or IP address of your LDAP server.

        LDAP_USER_BASE_DN  The base DN under which all Guacamole users will be
                           located. Absolutely all Guacamole users that will
                           authenticate via LDAP must exist within the subtree of
                           this DN.
    """
)

NOAUTH_EXPLANATION: Final[str] = dedent(
    """\
    If using noauth authentication, you must provide the following environment
    variables:

        NOAUTH_HOSTNAMES        list of connection hostnames
    """
)


def _secret_explanation(label: str, variable: str) -> str:
    return dedent(
        f"""\
        If using {label} authentication, you must provide the following environment
        variables:

            {variable:<18} The shared token used to sign messages.
        """
    )


@dataclass(frozen=True, slots=True)
class DatabaseProfile:
    """Naming conventions of one JDBC backend.

    ``env_prefix`` selects the variables (``MYSQL``/``POSTGRES``), ``alias`` the
    Docker link name, and ``title`` the product name used in diagnostics.
    """

    env_prefix: str
    alias: str
    title: str
    default_port: str
    link_port: int

    def variable(self, suffix: str) -> str:
        return f"{self.env_prefix}_{suffix}"

    def link_explanation(self) -> str:
        hostname = self.variable("HOSTNAME")
        port = self.variable("PORT")
        return dedent(
            f"""\
            If using a {self.title} database, you must either:

            (a) Explicitly link that container with the link named "{self.alias}".

            (b) If not using a Docker container for {self.title}, explicitly specify the TCP
                connection to your database using the following environment variables:

                {hostname:<18} The hostname or IP address of the {self.title} server. If
                                   not using a {self.title} Docker container and
                                   corresponding link, this environment variable is
                                   *REQUIRED*.

                {port:<18} The port on which the {self.title} server is listening for
                                   TCP connections. This environment variable is optional.
                                   If omitted, the standard {self.title} port of
                                   {self.default_port} will be used.
            """
        )

    def credentials_explanation(self) -> str:
        user = self.variable("USER")
        password = self.variable("PASSWORD")
        database = self.variable("DATABASE")
        return dedent(
            f"""\
            If using a {self.title} database, you must provide each of the following
            environment variables:

                {user:<18} The user to authenticate as when connecting to
                                   {self.title}.

                {password:<18} The password to use when authenticating with
                                   {self.title} as {user}.

                {database:<18} The name of the {self.title} database to use for
                                   Guacamole authentication.
            """
        )


MYSQL: Final[DatabaseProfile] = DatabaseProfile("MYSQL", "mysql", "MySQL", "3306", 3306)
POSTGRESQL: Final[DatabaseProfile] = DatabaseProfile("POSTGRES", "postgres", "PostgreSQL", "5432", 5432)


def resolve_guacd(env: EnvironmentSnapshot) -> GuacdLink:
    """Return the ``guacd`` address published by the ``guacd`` link.

    Raises
    ------
    MissingLink
        When either ``GUACD_PORT_4822_TCP_ADDR`` or ``GUACD_PORT_4822_TCP_PORT``
        is unset.
    """

    hostname, port = env.link("guacd", 4822)
    if not hostname or not port:
        raise MissingLink('Missing "guacd" link.', GUACD_EXPLANATION)
    return GuacdLink(hostname=hostname, port=port)


def resolve_mysql(env: EnvironmentSnapshot) -> MysqlBackend:
    """Validate the MySQL variables (or ``mysql`` link) and return the backend."""

    return MysqlBackend(**_resolve_database(env, MYSQL))


def resolve_postgresql(env: EnvironmentSnapshot) -> PostgresqlBackend:
    """Validate the PostgreSQL variables (or ``postgres`` link) and return the backend."""

    return PostgresqlBackend(**_resolve_database(env, POSTGRESQL))


def _resolve_database(env: EnvironmentSnapshot, profile: DatabaseProfile) -> dict[str, object]:
    """Return constructor arguments shared by both JDBC descriptors.

    When the ``<PREFIX>_NAME`` link marker is set, the link's address and port
    replace any explicit ``<PREFIX>_HOSTNAME``/``<PREFIX>_PORT``. Docker itself
    sets ``<PREFIX>_PORT`` to a ``tcp://`` URL for linked containers. An
    operator who sets both a link and explicit values gets the link.
    """

    hostname, port = _database_address(env, profile)
    if not hostname or not port:
        raise MissingLink(
            f'Missing {profile.variable("HOSTNAME")} or "{profile.alias}" link.',
            profile.link_explanation(),
        )

    username = env.value(profile.variable("USER"))
    password = env.value(profile.variable("PASSWORD"))
    database = env.value(profile.variable("DATABASE"))
    if not username or not password or not database:
        raise MissingRequiredField(MISSING_REQUIRED, profile.credentials_explanation())

    tunables = tuple(
        (suffix, env.value(profile.variable(suffix.replace("-", "_").upper()))) for suffix in TUNABLES
    )
    log_debug(
        "database_resolved",
        **make_event(profile.alias, None, {"hostname": hostname, "port": port, "database": database}),
    )
    return {
        "hostname": hostname,
        "port": port,
        "database": database,
        "username": username,
        "password": password,
        "tunables": tunables,
    }


def _database_address(env: EnvironmentSnapshot, profile: DatabaseProfile) -> tuple[str, str]:
    """Return ``(hostname, port)`` with link precedence and the default port applied.

    With a link present the link's port is used as published, so a link without
    a port is reported as missing rather than silently defaulted.
    """

    if env.is_set(profile.variable("NAME")):
        return env.link(profile.alias, profile.link_port)
    hostname = env.value(profile.variable("HOSTNAME"))
    port = env.value(profile.variable("PORT"), profile.default_port)
    return hostname, port


def resolve_ldap(env: EnvironmentSnapshot) -> LdapBackend:
    """Validate the LDAP variables and return the backend."""

    hostname = env.value("LDAP_HOSTNAME")
    user_base_dn = env.value("LDAP_USER_BASE_DN")
    if not hostname or not user_base_dn:
        raise MissingRequiredField(MISSING_REQUIRED, LDAP_EXPLANATION)
    return LdapBackend(
        hostname=hostname,
        user_base_dn=user_base_dn,
        port=env.value("LDAP_PORT"),
        encryption_method=env.value("LDAP_ENCRYPTION_METHOD"),
        username_attribute=env.value("LDAP_USERNAME_ATTRIBUTE"),
        group_base_dn=env.value("LDAP_GROUP_BASE_DN"),
        config_base_dn=env.value("LDAP_CONFIG_BASE_DN"),
        search_bind_dn=env.value("LDAP_SEARCH_BIND_DN"),
        search_bind_password=env.value("LDAP_SEARCH_BIND_PASSWORD"),
    )


def resolve_hmac(env: EnvironmentSnapshot) -> HmacBackend:
    """Validate ``HMAC_SECRET`` and return the backend."""

    secret = env.value("HMAC_SECRET")
    if not secret:
        raise MissingRequiredField(MISSING_REQUIRED, _secret_explanation("HMAC", "HMAC_SECRET"))
    return HmacBackend(
        secret=secret,
        timestamp_age_limit=env.value("HMAC_TIMESTAMP", DEFAULT_TIMESTAMP_AGE_LIMIT),
    )


def resolve_encryptedurl(env: EnvironmentSnapshot) -> EncryptedUrlBackend:
    """Validate ``ENCRYPTEDURL_SECRET`` and return the backend."""

    secret = env.value("ENCRYPTEDURL_SECRET")
    if not secret:
        raise MissingRequiredField(
            MISSING_REQUIRED,
            _secret_explanation("ENCRYPTEDURL", "ENCRYPTEDURL_SECRET"),
        )
    return EncryptedUrlBackend(
        secret=secret,
        timestamp_age_limit=env.value("ENCRYPTEDURL_TIMESTAMP", DEFAULT_TIMESTAMP_AGE_LIMIT),
    )


def resolve_noauth(env: EnvironmentSnapshot, config_path: Path) -> NoAuthBackend:
    """Build the RDP connection list from the ``NOAUTH_*`` variables.

    Only the hosts list is validated; usernames, passwords and remote
    applications are optional and may be shorter than the hosts list.
    """

    hosts = split_list(env.value("NOAUTH_HOSTNAMES"))
    if not any(hosts):
        raise MissingRequiredField(MISSING_REQUIRED, NOAUTH_EXPLANATION)
    connections = build_connections(
        hosts,
        usernames=split_list(env.value("NOAUTH_USERNAMES")),
        passwords=split_list(env.value("NOAUTH_PASSWORDS")),
        remote_apps=split_list(env.value("NOAUTH_REMOTEAPPS")),
        security=env.value("NOAUTH_SECURITY"),
        ignore_cert=env.value("NOAUTH_CERT"),
    )
    log_debug("noauth_resolved", **make_event("noauth", str(config_path), {"connections": len(connections)}))
    return NoAuthBackend(connections=connections, config_path=config_path)
