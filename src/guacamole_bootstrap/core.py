"""Composition root for ``guacamole_bootstrap``.

Purpose
-------
Provide the single entry point that resolves the ``guacd`` link, selects the
authentication backends, writes the generated configuration, links the plugin
archives and finally hands the process over to Tomcat.

Contents
--------
* :class:`BootstrapPlan` – everything a run will write, computed without I/O.
* :func:`plan_bootstrap` – pure validation and property derivation.
* :func:`bootstrap` – applies a plan to the filesystem.
* :func:`start` – :func:`bootstrap` followed by the server handoff.

System Role
-----------
This module connects the pure resolvers with the filesystem and process
adapters. Validation happens entirely inside :func:`plan_bootstrap`, so a
failing environment never leaves a ``guacamole.properties`` file behind.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, NoReturn

from .adapters.plugins.default import SymlinkPluginInstaller
from .adapters.writers.default import FileArtifactWriter
from .application.connections import render_connection_list
from .application.ports import ArtifactWriter, Launcher, PluginInstaller
from .application.resolvers import resolve_guacd
from .application.selector import select_backends
from .domain.backends import Backend, BackendKind, GuacdLink, NoAuthBackend
from .domain.environment import EnvironmentSnapshot
from .domain.errors import BootstrapError
from .domain.layout import HomeLayout
from .domain.properties import PropertyStore
from .observability import bind_run_id, log_error, log_info, make_event


@dataclass(frozen=True)
class BootstrapPlan:
    """Validated outcome of a run, ready to be written.

    ``store`` holds the properties in emission order: the ``guacd`` pair first,
    then each backend in priority order.
    """

    layout: HomeLayout
    guacd: GuacdLink
    backends: tuple[Backend, ...]
    store: PropertyStore = field(compare=False)

    @property
    def installed(self) -> list[BackendKind]:
        return [backend.kind for backend in self.backends]

    @property
    def noauth(self) -> NoAuthBackend | None:
        for backend in self.backends:
            if isinstance(backend, NoAuthBackend):
                return backend
        return None

    def connection_list(self) -> str | None:
        """Return the noauth document, or ``None`` when noauth is not installed."""

        noauth = self.noauth
        if noauth is None:
            return None
        return render_connection_list(noauth.connections)


def plan_bootstrap(env: EnvironmentSnapshot, layout: HomeLayout) -> BootstrapPlan:
    """Validate *env* and derive every property without touching the filesystem.

    Raises
    ------
    MissingLink
        When the ``guacd`` link, or a database link/hostname, is absent.
    MissingRequiredField
        When a selected backend lacks a mandatory variable.
    NoBackendInstalled
        When no backend trigger variable is set.
    """

    guacd = resolve_guacd(env)
    store = PropertyStore()
    guacd.emit(store)

    backends = select_backends(env, layout)
    for backend in backends:
        backend.emit(store)
    return BootstrapPlan(layout=layout, guacd=guacd, backends=backends, store=store)


def bootstrap(
    env: EnvironmentSnapshot,
    layout: HomeLayout,
    *,
    writer: ArtifactWriter | None = None,
    installer: PluginInstaller | None = None,
    clock: Callable[[], datetime] | None = None,
) -> BootstrapPlan:
    """Reset the home directory and write everything a valid *env* produces.

    The home directory is reset before validation; a failing run leaves it
    holding only empty ``extensions`` and ``lib`` directories.
    """

    writer = writer or FileArtifactWriter()
    installer = installer or SymlinkPluginInstaller()
    clock = clock or _now

    bind_run_id(uuid.uuid4().hex)
    writer.reset(layout)
    try:
        plan = plan_bootstrap(env, layout)
    except BootstrapError as exc:
        log_error("bootstrap_failed", **make_event("none", str(layout.home), {"reason": exc.reason}))
        raise

    noauth = plan.noauth
    if noauth is not None:
        writer.write_connection_list(layout, noauth.connections)
    writer.write_properties(layout, plan.store, clock())
    for backend in plan.backends:
        installer.install(layout, backend.plugins)

    log_info(
        "bootstrap_complete",
        **make_event("all", str(layout.properties), {"installed": [kind.value for kind in plan.installed]}),
    )
    return plan


def start(
    env: EnvironmentSnapshot,
    layout: HomeLayout,
    *,
    launcher: Launcher,
    writer: ArtifactWriter | None = None,
    installer: PluginInstaller | None = None,
) -> NoReturn:
    """Bootstrap, then replace the current process with the application server."""

    bootstrap(env, layout, writer=writer, installer=installer)
    launcher.launch()


def _now() -> datetime:
    return datetime.now().astimezone()


__all__ = [
    "BootstrapPlan",
    "plan_bootstrap",
    "bootstrap",
    "start",
]
