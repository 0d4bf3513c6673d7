from __future__ import annotations

from datetime import datetime

from guacamole_bootstrap.adapters.writers.default import FileArtifactWriter
from guacamole_bootstrap.domain.backends import ConnectionRecord
from guacamole_bootstrap.domain.properties import PropertyStore


def test_reset_removes_previous_home(layout) -> None:
    stale = layout.extensions / "stale.jar"
    stale.parent.mkdir(parents=True)
    stale.write_text("old", encoding="utf-8")
    layout.properties.write_text("old: value\n", encoding="utf-8")

    FileArtifactWriter().reset(layout)

    assert layout.extensions.is_dir() and layout.lib.is_dir()
    assert not stale.exists()
    assert not layout.properties.exists()


def test_write_properties(layout) -> None:
    store = PropertyStore()
    store.set("guacd-hostname", "guacd")
    FileArtifactWriter().write_properties(layout, store, datetime(2015, 6, 1, 12, 0, 0))
    assert layout.properties.read_text(encoding="utf-8") == (
        "# guacamole.properties - generated Mon Jun  1 12:00:00 2015\nguacd-hostname: guacd\n"
    )


def test_write_connection_list(layout) -> None:
    FileArtifactWriter().write_connection_list(layout, [ConnectionRecord(0, "rdp1")])
    text = layout.noauth_config.read_text(encoding="utf-8")
    assert text.startswith("<configs>")
    assert '<config name="0" protocol="rdp">' in text
    assert text.endswith("</configs>\n")
