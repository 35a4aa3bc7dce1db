"""Tests for the idle-session reaper."""

import asyncio

import pytest

from app.models.session import Session
from app.services.reaper import SessionReaper

HOUR_MS = 3600 * 1000
NOW = 100 * HOUR_MS


def add_session(sessions, session_id, last_activity, members=(), legacy=True):
    session = Session(id=session_id, video_id=1, last_activity=last_activity, legacy=legacy)
    for member in members:
        session.add_member(member)
    return sessions.add(session)


@pytest.fixture
def reaper(sessions):
    return SessionReaper(sessions, interval=3600, idle_timeout=3600)


def test_sweep_removes_only_empty_idle_sessions(reaper, sessions):
    add_session(sessions, "aaaaaaaaaaaaaaaa", NOW - 2 * HOUR_MS)
    add_session(sessions, "bbbbbbbbbbbbbbbb", NOW - 10 * 1000)
    add_session(sessions, "cccccccccccccccc", NOW - 2 * HOUR_MS, members=["u1"])

    removed = reaper.sweep(now=NOW)

    assert removed == ["aaaaaaaaaaaaaaaa"]
    assert sessions.ids() == ["bbbbbbbbbbbbbbbb", "cccccccccccccccc"]


def test_sweep_twice_removes_nothing_more(reaper, sessions):
    add_session(sessions, "aaaaaaaaaaaaaaaa", NOW - 2 * HOUR_MS)
    add_session(sessions, "bbbbbbbbbbbbbbbb", NOW)

    assert reaper.sweep(now=NOW) == ["aaaaaaaaaaaaaaaa"]
    assert reaper.sweep(now=NOW) == []
    assert sessions.ids() == ["bbbbbbbbbbbbbbbb"]


def test_sweep_threshold_is_exclusive(reaper, sessions):
    add_session(sessions, "aaaaaaaaaaaaaaaa", NOW - HOUR_MS)

    assert reaper.sweep(now=NOW) == []


def test_sweep_also_collects_leftover_live_sessions(reaper, sessions):
    add_session(sessions, "aaaaaaaaaaaaaaaa", NOW - 2 * HOUR_MS, legacy=False)

    assert reaper.sweep(now=NOW) == ["aaaaaaaaaaaaaaaa"]


def test_session_gaining_member_between_passes_is_kept(reaper, sessions, monkeypatch):
    session = add_session(sessions, "aaaaaaaaaaaaaaaa", NOW - 2 * HOUR_MS)
    original_get = sessions.get

    def get_after_join(session_id):
        # A member joins after the mark pass, before the delete pass
        session.add_member("late")
        return original_get(session_id)

    monkeypatch.setattr(sessions, "get", get_after_join)

    assert reaper.sweep(now=NOW) == []
    assert "aaaaaaaaaaaaaaaa" in sessions


@pytest.mark.asyncio
async def test_background_task_sweeps_periodically(sessions):
    add_session(sessions, "aaaaaaaaaaaaaaaa", 0)
    reaper = SessionReaper(sessions, interval=0, idle_timeout=0)

    reaper.start()
    for _ in range(5):
        await asyncio.sleep(0)
    await reaper.stop()

    assert len(sessions) == 0


@pytest.mark.asyncio
async def test_stop_without_start_is_noop(reaper):
    await reaper.stop()
