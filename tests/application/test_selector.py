"""Backend selector tests: trigger evaluation, ordering and the no-backend failure."""

from __future__ import annotations

from pathlib import Path

import pytest
from hypothesis import given
from hypothesis import strategies as st

from guacamole_bootstrap.application.selector import TRIGGERS, select_backends, triggered
from guacamole_bootstrap.domain.backends import BackendKind
from guacamole_bootstrap.domain.environment import EnvironmentSnapshot
from guacamole_bootstrap.domain.errors import MissingLink, NoBackendInstalled
from guacamole_bootstrap.domain.layout import HomeLayout

LAYOUT = HomeLayout(Path("/srv/guacamole"))

VALID = {
    BackendKind.MYSQL: {"MYSQL_DATABASE": "db", "MYSQL_HOSTNAME": "mysql", "MYSQL_USER": "u", "MYSQL_PASSWORD": "p"},
    BackendKind.POSTGRESQL: {
        "POSTGRES_DATABASE": "db",
        "POSTGRES_HOSTNAME": "pg",
        "POSTGRES_USER": "u",
        "POSTGRES_PASSWORD": "p",
    },
    BackendKind.LDAP: {"LDAP_HOSTNAME": "ldap", "LDAP_USER_BASE_DN": "dc=example"},
    BackendKind.HMAC: {"HMAC_SECRET": "h"},
    BackendKind.ENCRYPTEDURL: {"ENCRYPTEDURL_SECRET": "e"},
    BackendKind.NOAUTH: {"NOAUTH_HOSTNAMES": "rdp1"},
}


def test_trigger_table_order() -> None:
    assert [trigger.kind for trigger in TRIGGERS] == list(BackendKind)
    assert [trigger.variable for trigger in TRIGGERS] == [
        "MYSQL_DATABASE",
        "POSTGRES_DATABASE",
        "LDAP_HOSTNAME",
        "HMAC_SECRET",
        "ENCRYPTEDURL_SECRET",
        "NOAUTH_HOSTNAMES",
    ]


def test_no_trigger_is_fatal() -> None:
    with pytest.raises(NoBackendInstalled) as excinfo:
        select_backends(EnvironmentSnapshot({"LDAP_USER_BASE_DN": "dc=example"}), LAYOUT)
    assert excinfo.value.render().startswith("FATAL: No authentication configured")


def test_empty_trigger_does_not_select() -> None:
    assert triggered(EnvironmentSnapshot({"MYSQL_DATABASE": ""})) == []
    with pytest.raises(NoBackendInstalled):
        select_backends(EnvironmentSnapshot({"MYSQL_DATABASE": "", "NOAUTH_HOSTNAMES": ""}), LAYOUT)


def test_first_failure_wins() -> None:
    env = EnvironmentSnapshot({"MYSQL_DATABASE": "db", "HMAC_SECRET": "h"})
    with pytest.raises(MissingLink):
        select_backends(env, LAYOUT)


def test_noauth_document_path_follows_layout() -> None:
    (backend,) = select_backends(EnvironmentSnapshot(VALID[BackendKind.NOAUTH]), LAYOUT)
    assert backend.config_path == LAYOUT.noauth_config


@given(st.sets(st.sampled_from(list(BackendKind)), min_size=1))
def test_selected_backends_follow_priority_order(kinds) -> None:
    variables: dict[str, str] = {}
    for kind in kinds:
        variables.update(VALID[kind])
    backends = select_backends(EnvironmentSnapshot(variables), LAYOUT)
    expected = [kind for kind in BackendKind if kind in kinds]
    assert [backend.kind for backend in backends] == expected
    assert [trigger.kind for trigger in triggered(EnvironmentSnapshot(variables))] == expected
