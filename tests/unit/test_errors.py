from __future__ import annotations

from guacamole_bootstrap.domain.errors import (
    SEPARATOR,
    BootstrapError,
    MissingLink,
    MissingPlugin,
    MissingRequiredField,
    NoBackendInstalled,
)


def test_error_hierarchy() -> None:
    for exception_cls in (MissingLink, MissingRequiredField, NoBackendInstalled, MissingPlugin):
        assert issubclass(exception_cls, BootstrapError)
        assert isinstance(exception_cls("reason"), BootstrapError)


def test_render_banner_layout() -> None:
    error = MissingLink('Missing "guacd" link.', "Link a container named guacd.\n")
    lines = error.render().splitlines()
    assert lines == ['FATAL: Missing "guacd" link.', SEPARATOR, "Link a container named guacd."]
    assert len(SEPARATOR) == 79
    assert str(error) == 'Missing "guacd" link.'


def test_render_without_explanation() -> None:
    assert BootstrapError("Boom").render() == f"FATAL: Boom\n{SEPARATOR}"
