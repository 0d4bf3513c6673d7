"""CLI adapter for ``guacamole_bootstrap`` built on ``lib_cli_exit_tools``.

Purpose
-------
Expose the bootstrap as the container entrypoint and give operators a way to
check an environment without starting Tomcat.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command wiring traceback handling and verbose logging.
* :func:`cli_info` – prints distribution metadata for quick diagnostics.
* :func:`cli_start` – resets ``GUACAMOLE_HOME``, writes configuration, execs Tomcat.
* :func:`cli_render` – validates the environment and prints the generated documents.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
The CLI lives in the outermost layer. Fatal configuration problems surface as
:class:`~guacamole_bootstrap.domain.errors.BootstrapError`; they are printed to
standard output as ``FATAL`` banners and end the run with exit status ``1``.
Anything else goes through ``lib_cli_exit_tools``.
"""

from __future__ import annotations

import sys
from datetime import datetime
from importlib import metadata
from pathlib import Path
from typing import Final, NoReturn, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .adapters.env.default import DefaultEnvLoader
from .adapters.launcher.default import DEFAULT_SERVER_HOME, CatalinaLauncher
from .adapters.plugins.default import DEFAULT_PLUGIN_ROOT, SymlinkPluginInstaller
from .core import bootstrap, plan_bootstrap
from .domain.errors import BootstrapError
from .domain.layout import HomeLayout, default_home
from .observability import enable_console_logging

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000
FATAL_EXIT_CODE: Final[int] = 1

_home_option = click.option(
    "--home",
    type=click.Path(path_type=Path, file_okay=False, dir_okay=True),
    envvar="GUACAMOLE_HOME",
    default=default_home,
    show_default="$HOME/.guacamole",
    help="Guacamole configuration home (removed and regenerated on start)",
)


def _resolve_version() -> str:
    """Return the installed package version, ``"0.0.0"`` for source checkouts."""

    try:
        return metadata.version("guacamole_bootstrap")
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="Configure and start the Guacamole web application inside its container",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name="guacamole_bootstrap",
    message="guacamole_bootstrap version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.option(
    "--verbose/--quiet",
    default=False,
    help="Log bootstrap events to standard error",
)
def cli(traceback: bool, verbose: bool) -> None:
    """Root command configuring traceback handling and logging for all subcommands.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and
        ``lib_cli_exit_tools.config.traceback_force_color``; attaches a stderr
        log handler when ``--verbose`` is given.
    """

    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback
    if verbose:
        enable_console_logging()


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata("guacamole_bootstrap")
    except metadata.PackageNotFoundError:
        click.echo("guacamole_bootstrap (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', 'guacamole_bootstrap')}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")


@cli.command("start", context_settings=CLICK_CONTEXT_SETTINGS)
@_home_option
@click.option(
    "--plugin-root",
    type=click.Path(path_type=Path, file_okay=False, dir_okay=True),
    envvar="GUACAMOLE_PLUGIN_ROOT",
    default=DEFAULT_PLUGIN_ROOT,
    show_default=True,
    help="Directory holding the packaged authentication archives",
)
@click.option(
    "--server-home",
    type=click.Path(path_type=Path, file_okay=False, dir_okay=True),
    envvar="CATALINA_HOME",
    default=DEFAULT_SERVER_HOME,
    show_default=True,
    help="Tomcat installation directory (working directory of catalina.sh)",
)
@click.option(
    "--launch/--no-launch",
    default=True,
    show_default=True,
    help="Replace this process with Tomcat once the configuration is written",
)
def cli_start(home: Path, plugin_root: Path, server_home: Path, launch: bool) -> None:
    """Regenerate ``guacamole.properties`` from the environment and start Tomcat.

    The configuration home is deleted first. Link containers named ``guacd``
    (required) and ``mysql`` or ``postgres``, or set the LDAP, HMAC,
    ENCRYPTEDURL or NOAUTH variables, to select authentication backends.
    """

    env = DefaultEnvLoader().load()
    layout = HomeLayout(home)
    try:
        plan = bootstrap(env, layout, installer=SymlinkPluginInstaller(plugin_root))
    except BootstrapError as exc:
        _fail(exc)
    if not launch:
        click.echo(f"Wrote {layout.properties} ({', '.join(kind.value for kind in plan.installed)})")
        return
    CatalinaLauncher(server_home).launch()


@cli.command("render", context_settings=CLICK_CONTEXT_SETTINGS)
@_home_option
@click.option(
    "--connections/--no-connections",
    default=False,
    help="Also print the noauth connection list when noauth is configured",
)
def cli_render(home: Path, connections: bool) -> None:
    """Validate the environment and print the documents ``start`` would write.

    Nothing is written to disk and Tomcat is not started.
    """

    env = DefaultEnvLoader().load()
    try:
        plan = plan_bootstrap(env, HomeLayout(home))
    except BootstrapError as exc:
        _fail(exc)
    click.echo(plan.store.render(datetime.now().astimezone()), nl=False)
    document = plan.connection_list() if connections else None
    if document is not None:
        click.echo(document)


def _fail(exc: BootstrapError) -> NoReturn:
    """Print the operator banner for *exc* to standard output and exit with status 1."""

    click.echo(exc.render())
    raise SystemExit(FATAL_EXIT_CODE)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the entrypoint and return the process exit status.

    ``FATAL`` configuration errors are handled inside the commands. Anything
    else that escapes (an unreadable plugin root, a failed exec) is printed by
    ``lib_cli_exit_tools``: a one-line summary, or the full traceback under
    ``--traceback``. The traceback flags are restored afterwards so repeated
    in-process calls start from the same state.
    """

    saved = (lib_cli_exit_tools.config.traceback, lib_cli_exit_tools.config.traceback_force_color)
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name="guacamole-bootstrap",
        )
    except BaseException as exc:  # noqa: BLE001 - every escape becomes an exit status
        verbose = lib_cli_exit_tools.config.traceback
        lib_cli_exit_tools.print_exception_message(
            trace_back=verbose,
            length_limit=_TRACEBACK_VERBOSE_LIMIT if verbose else _TRACEBACK_SUMMARY_LIMIT,
        )
        return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        lib_cli_exit_tools.config.traceback, lib_cli_exit_tools.config.traceback_force_color = saved


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
