"""Backend selector.

Purpose
    Decide which authentication backends to install from the trigger variables
    present in the environment, in a fixed priority order.

Contents
    - ``BackendTrigger``: pairs a backend with its trigger variable and resolver.
    - ``TRIGGERS``: the ordered trigger table.
    - ``select_backends``: evaluates every trigger and returns the descriptors.

System Integration
    Called by :func:`guacamole_bootstrap.core.plan_bootstrap`. Triggers are not
    mutually exclusive; each one that is set contributes a backend. The first
    resolver that raises aborts the selection.
"""

from __future__ import annotations

from dataclasses import dataclass
from textwrap import dedent
from typing import Callable, Final

from ..domain.backends import Backend, BackendKind
from ..domain.environment import EnvironmentSnapshot
from ..domain.errors import NoBackendInstalled
from ..domain.layout import HomeLayout
from ..observability import log_info, make_event
from . import resolvers

NO_BACKEND_EXPLANATION: Final[str] = dedent(
    """\
    The Guacamole Docker container needs at least one authentication mechanism in
    order to function, such as a MySQL database, PostgreSQL database, or LDAP
    directory.  Please specify at least the MYSQL_DATABASE or POSTGRES_DATABASE
    environment variables, or check Guacamole's Docker documentation regarding
    configuring LDAP.
    """
)


@dataclass(frozen=True, slots=True)
class BackendTrigger:
    kind: BackendKind
    variable: str
    resolve: Callable[[EnvironmentSnapshot, HomeLayout], Backend]


TRIGGERS: Final[tuple[BackendTrigger, ...]] = (
    BackendTrigger(BackendKind.MYSQL, "MYSQL_DATABASE", lambda env, _: resolvers.resolve_mysql(env)),
    BackendTrigger(BackendKind.POSTGRESQL, "POSTGRES_DATABASE", lambda env, _: resolvers.resolve_postgresql(env)),
    BackendTrigger(BackendKind.LDAP, "LDAP_HOSTNAME", lambda env, _: resolvers.resolve_ldap(env)),
    BackendTrigger(BackendKind.HMAC, "HMAC_SECRET", lambda env, _: resolvers.resolve_hmac(env)),
    BackendTrigger(BackendKind.ENCRYPTEDURL, "ENCRYPTEDURL_SECRET", lambda env, _: resolvers.resolve_encryptedurl(env)),
    BackendTrigger(
        BackendKind.NOAUTH,
        "NOAUTH_HOSTNAMES",
        lambda env, layout: resolvers.resolve_noauth(env, layout.noauth_config),
    ),
)


def triggered(env: EnvironmentSnapshot) -> list[BackendTrigger]:
    """Return the triggers whose variable is set, in priority order."""

    return [trigger for trigger in TRIGGERS if env.is_set(trigger.variable)]


def select_backends(env: EnvironmentSnapshot, layout: HomeLayout) -> tuple[Backend, ...]:
    """Resolve every triggered backend and return the installed set.

    Raises
    ------
    NoBackendInstalled
        When no trigger variable is set.
    BootstrapError
        Whatever the first failing resolver raises.
    """

    installed: list[Backend] = []
    for trigger in triggered(env):
        backend = trigger.resolve(env, layout)
        log_info("backend_selected", **make_event(trigger.kind.value, None, {"trigger": trigger.variable}))
        installed.append(backend)
    if not installed:
        raise NoBackendInstalled("No authentication configured", NO_BACKEND_EXPLANATION)
    return tuple(installed)
