"""Tests for version state and events."""

from electron_runner.versions import EventEmitter, Events, InstallState, StateStore


def make_store():
    events = EventEmitter()
    seen = []
    events.on(Events.STATE_CHANGED, lambda version, state: seen.append((version, state)))
    return StateStore(events), events, seen


def test_unknown_version_is_not_downloaded():
    store, _, _ = make_store()
    assert store.get("1.0.0") == InstallState.NOT_DOWNLOADED
    assert store.get("1.0.0") == "not_downloaded"
    assert store.installed_version() is None


def test_set_emits_only_on_change():
    store, _, seen = make_store()
    store.set("1.0.0", InstallState.DOWNLOADING)
    store.set("1.0.0", InstallState.DOWNLOADING)
    store.set("1.0.0", InstallState.DOWNLOADED)

    assert seen == [
        ("1.0.0", InstallState.DOWNLOADING),
        ("1.0.0", InstallState.DOWNLOADED),
    ]


def test_delete_reverts_to_default_and_emits():
    store, _, seen = make_store()
    store.set("1.0.0", InstallState.DOWNLOADED)
    store.delete("1.0.0")

    assert store.get("1.0.0") == InstallState.NOT_DOWNLOADED
    assert "1.0.0" not in store.items()
    assert seen[-1] == ("1.0.0", InstallState.NOT_DOWNLOADED)


def test_installed_version():
    store, _, _ = make_store()
    store.set("1.0.0", InstallState.DOWNLOADED)
    store.set("2.0.0", InstallState.INSTALLED)
    assert store.installed_version() == "2.0.0"


def test_clear_is_silent():
    store, _, seen = make_store()
    store.set("1.0.0", InstallState.DOWNLOADED)
    seen.clear()
    store.clear()
    assert store.items() == {}
    assert seen == []


def test_failing_listener_does_not_block_others():
    store, events, seen = make_store()

    def broken(version, state):
        raise RuntimeError("boom")

    events.on(Events.STATE_CHANGED, broken)
    later = []
    events.on(Events.STATE_CHANGED, lambda *args: later.append(args))

    store.set("1.0.0", InstallState.DOWNLOADING)

    assert store.get("1.0.0") == InstallState.DOWNLOADING
    assert seen == [("1.0.0", InstallState.DOWNLOADING)]
    assert later == [("1.0.0", InstallState.DOWNLOADING)]


def test_off_removes_listener():
    events = EventEmitter()
    calls = []
    listener = calls.append
    events.on("ping", listener)
    events.emit("ping", 1)
    events.off("ping", listener)
    events.off("ping", listener)
    events.emit("ping", 2)
    assert calls == [1]
