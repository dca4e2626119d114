"""
Tests for the debounced task used by filter-driven fetches.

Delays are kept to a few milliseconds; every wait leaves a wide margin over
the debounce window.
"""

import asyncio

import pytest
from hypothesis import given, settings, strategies as st
from listing_engine.debounce import DebouncedTask


DELAY_MS = 20
SETTLE = DELAY_MS / 1000 * 5


@given(values=st.lists(st.integers(), min_size=1, max_size=10))
@settings(max_examples=20, deadline=None)
def test_burst_collapses_to_last_call(values):
    """
    **Feature: car-listing-engine, Property 17: Debounce collapses bursts**

    For any burst of triggers inside the window, the callback runs once with
    the arguments of the last trigger.
    """
    calls = []

    async def scenario():
        task = DebouncedTask(calls.append, delay_ms=DELAY_MS)
        for value in values:
            task.trigger(value)
        assert task.pending
        await asyncio.sleep(SETTLE)
        assert not task.pending

    asyncio.run(scenario())

    assert calls == [values[-1]]


@pytest.mark.asyncio
async def test_immediate_bypasses_window():
    calls = []
    task = DebouncedTask(calls.append, delay_ms=10_000)

    task.trigger("slow")
    task.trigger("fast", immediate=True)

    assert calls == ["fast"]
    assert not task.pending


@pytest.mark.asyncio
async def test_flush_runs_pending_call_now():
    calls = []
    task = DebouncedTask(lambda *args, **kwargs: calls.append((args, kwargs)), delay_ms=10_000)

    task.trigger(1, page=2)
    task.flush()
    task.flush()

    assert calls == [((1,), {"page": 2})]


@pytest.mark.asyncio
async def test_cancel_drops_pending_call():
    calls = []
    task = DebouncedTask(calls.append, delay_ms=DELAY_MS)

    task.trigger("dropped")
    task.cancel()
    await asyncio.sleep(SETTLE)

    assert calls == []
    assert task.flush() is None


@pytest.mark.asyncio
async def test_separate_bursts_fire_separately():
    calls = []
    task = DebouncedTask(calls.append, delay_ms=DELAY_MS)

    task.trigger("first")
    await asyncio.sleep(SETTLE)
    task.trigger("second")
    await asyncio.sleep(SETTLE)

    assert calls == ["first", "second"]


@pytest.mark.asyncio
async def test_coroutine_callback_is_scheduled_as_task():
    results = []

    async def fetch(value):
        await asyncio.sleep(0)
        results.append(value)
        return value

    task = DebouncedTask(fetch, delay_ms=10_000)
    scheduled = task.trigger("now", immediate=True)

    assert isinstance(scheduled, asyncio.Task)
    assert await scheduled == "now"
    await task.drain()
    assert results == ["now"]


@pytest.mark.asyncio
async def test_callback_errors_are_logged_not_raised(caplog):
    async def broken():
        raise RuntimeError("backend down")

    def also_broken():
        raise ValueError("bad filters")

    failing = DebouncedTask(broken, delay_ms=DELAY_MS)
    failing.trigger(immediate=True)
    await failing.drain()

    sync_failing = DebouncedTask(also_broken, delay_ms=DELAY_MS)
    assert sync_failing.trigger(immediate=True) is None

    messages = " ".join(record.getMessage() for record in caplog.records)
    assert "backend down" in messages
    assert "bad filters" in messages
