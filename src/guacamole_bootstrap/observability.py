"""Logging for bootstrap runs.

Every step of a run (environment loaded, backend selected, home reset,
properties written, plugin linked, Tomcat launched) is logged as a short event
name plus a ``context`` dictionary attached to the record. The context always
carries the run id and names the backend and path the event concerns.

The package logger stays silent until ``--verbose`` attaches a stderr handler.
``FATAL`` banners are not log records; the CLI prints them to standard output.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from typing import Any, Final, Mapping

RUN_ID: ContextVar[str | None] = ContextVar("guacamole_bootstrap_run_id", default=None)
"""Id of the run in progress; :func:`guacamole_bootstrap.core.bootstrap` binds a fresh one."""

_LOGGER: Final[logging.Logger] = logging.getLogger("guacamole_bootstrap")
_LOGGER.addHandler(logging.NullHandler())

_CONSOLE_FORMAT: Final[str] = "%(asctime)s %(levelname)s %(name)s: %(message)s %(context)s"
_CONSOLE_HANDLER_NAME: Final[str] = "guacamole_bootstrap.console"


def get_logger() -> logging.Logger:
    """Return the ``guacamole_bootstrap`` logger."""

    return _LOGGER


def bind_run_id(run_id: str | None) -> None:
    """Tag subsequent events with *run_id* (``None`` removes the tag).

    Examples
    --------
    >>> bind_run_id('boot-1')
    >>> RUN_ID.get()
    'boot-1'
    >>> bind_run_id(None)
    >>> RUN_ID.get() is None
    True
    """

    RUN_ID.set(run_id)


def log_debug(event: str, **fields: Any) -> None:
    _emit(logging.DEBUG, event, fields)


def log_info(event: str, **fields: Any) -> None:
    _emit(logging.INFO, event, fields)


def log_error(event: str, **fields: Any) -> None:
    _emit(logging.ERROR, event, fields)


def make_event(
    backend: str,
    path: str | None,
    payload: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Return the ``backend``/``path`` pair an event refers to, plus *payload*.

    ``backend`` is a backend kind or the name of the component acting (``home``,
    ``plugins``, ``tomcat``); ``path`` is the file or directory touched, if any.

    Examples
    --------
    >>> make_event('mysql', None, {'port': '3306'})
    {'backend': 'mysql', 'path': None, 'port': '3306'}
    """

    event: dict[str, Any] = {"backend": backend, "path": path}
    if payload:
        event |= dict(payload)
    return event


def enable_console_logging(level: int = logging.DEBUG) -> logging.Handler:
    """Print events to stderr from now on; repeated calls reuse the same handler."""

    handler = next((h for h in _LOGGER.handlers if h.get_name() == _CONSOLE_HANDLER_NAME), None)
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(_CONSOLE_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
        _LOGGER.addHandler(handler)
    _LOGGER.setLevel(level)
    return handler


def _emit(level: int, event: str, fields: Mapping[str, Any]) -> None:
    context = {"run_id": RUN_ID.get(), **fields}
    _LOGGER.log(level, event, extra={"context": context})
