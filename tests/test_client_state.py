import asyncio

import pytest

from freet_social.client.state import AppState, sweep_alerts_periodically


def test_alert_is_visible_until_it_expires():
    state = AppState()
    state.alert("Followed alice.", "success", now=100.0, ttl=3.0)

    assert state.visible_alerts(now=102.9) == {"Followed alice.": "success"}
    assert state.visible_alerts(now=103.0) == {}


def test_sweep_removes_only_expired_alerts():
    state = AppState()
    state.alert("old", "error", now=100.0, ttl=3.0)
    state.alert("new", "success", now=102.0, ttl=3.0)

    expired = state.sweep_alerts(now=104.0)

    assert expired == ["old"]
    assert list(state.alerts) == ["new"]


def test_realerting_same_message_extends_it():
    state = AppState()
    state.alert("Saved.", "success", now=100.0, ttl=3.0)
    state.alert("Saved.", "success", now=102.0, ttl=3.0)

    assert state.sweep_alerts(now=104.0) == []
    assert "Saved." in state.alerts


def test_setters_update_fields():
    state = AppState()

    state.set_username("alice")
    state.update_filter("bob")
    state.set_contact_display(True)
    state.set_contact_number("6175550100")
    state.set_followers(["bob"])
    state.set_following(["carol"])

    assert state.username == "alice"
    assert state.filter == "bob"
    assert state.contact_displayed is True
    assert state.contact_number == "6175550100"
    assert state.followers == ["bob"]
    assert state.following == ["carol"]


def test_persist_and_load_skip_alerts(tmp_path):
    path = tmp_path / "state.json"
    state = AppState(username="alice", followers=["bob"])
    state.alert("transient", "success")

    state.persist(path)
    restored = AppState.load(path)

    assert restored.username == "alice"
    assert restored.followers == ["bob"]
    assert restored.alerts == {}


def test_load_without_snapshot_is_fresh_state(tmp_path):
    assert AppState.load(tmp_path / "missing.json") == AppState()


@pytest.mark.asyncio
async def test_periodic_sweep_drops_expired_alerts():
    state = AppState()
    state.alert("gone", "error", ttl=0.0)

    task = asyncio.create_task(sweep_alerts_periodically(state, interval=0.01))
    await asyncio.sleep(0.05)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert state.alerts == {}
