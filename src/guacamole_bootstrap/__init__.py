"""Public package surface for the Guacamole container bootstrap.

The container entrypoint (``guacamole-bootstrap start``) and ``python -m
guacamole_bootstrap`` both drive the composition root exported here, so tests
and embedding scripts can call the same functions with a synthetic
environment.
"""

from __future__ import annotations

from .core import BootstrapPlan, bootstrap, plan_bootstrap, start
from .domain.environment import EnvironmentSnapshot
from .domain.errors import BootstrapError, MissingLink, MissingPlugin, MissingRequiredField, NoBackendInstalled
from .domain.layout import HomeLayout
from .observability import bind_run_id, get_logger

__all__ = [
    "BootstrapPlan",
    "bootstrap",
    "plan_bootstrap",
    "start",
    "EnvironmentSnapshot",
    "HomeLayout",
    "BootstrapError",
    "MissingLink",
    "MissingPlugin",
    "MissingRequiredField",
    "NoBackendInstalled",
    "bind_run_id",
    "get_logger",
]
