from __future__ import annotations

from datetime import datetime, timedelta, timezone

from hypothesis import given
from hypothesis import strategies as st

from guacamole_bootstrap.domain.properties import PropertyEntry, PropertyStore, format_timestamp

NAMES = st.text(alphabet="abcdefghijklmnopqrstuvwxyz-", min_size=1, max_size=12)
VALUES = st.text(alphabet="abcdefghijklmnopqrstuvwxyz0123456789", max_size=8)


def test_set_appends_without_deduplication() -> None:
    store = PropertyStore()
    store.set("secret-key", "first")
    store.set("secret-key", "second")
    assert store.entries == (PropertyEntry("secret-key", "first"), PropertyEntry("secret-key", "second"))


def test_set_if_present_skips_empty_and_none() -> None:
    store = PropertyStore()
    store.set_if_present("ldap-port", "")
    store.set_if_present("ldap-port", None)
    store.set_if_present("ldap-port", "636")
    assert store.names() == ["ldap-port"]


def test_render_header_and_order() -> None:
    store = PropertyStore()
    store.set("guacd-hostname", "guacd")
    store.set("guacd-port", "4822")
    moment = datetime(2015, 6, 1, 12, 0, 0, tzinfo=timezone.utc)
    assert store.render(moment) == (
        "# guacamole.properties - generated Mon Jun  1 12:00:00 UTC 2015\n"
        "guacd-hostname: guacd\n"
        "guacd-port: 4822\n"
    )


def test_format_timestamp_includes_zone_when_known() -> None:
    moment = datetime(2015, 6, 1, 12, 0, 0, tzinfo=timezone(timedelta(hours=2), "CEST"))
    assert format_timestamp(moment) == "Mon Jun  1 12:00:00 CEST 2015"


def test_format_timestamp_pads_day_like_date() -> None:
    assert format_timestamp(datetime(2015, 6, 1, 9, 5, 0)) == "Mon Jun  1 09:05:00 2015"
    assert format_timestamp(datetime(2015, 6, 15, 9, 5, 0)) == "Mon Jun 15 09:05:00 2015"


@given(st.lists(st.tuples(NAMES, VALUES), max_size=10))
def test_render_lists_every_entry_in_insertion_order(pairs) -> None:
    store = PropertyStore()
    for name, value in pairs:
        store.set(name, value)
    lines = store.render(datetime(2020, 1, 1)).splitlines()
    assert lines[0].startswith("# guacamole.properties - generated ")
    assert lines[1:] == [f"{name}: {value}" for name, value in pairs]
