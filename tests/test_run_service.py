"""
Tests for the run service and its Redis store.
"""

import json
from datetime import UTC, datetime

import pytest

from reddyt.modules.runs import (
    FrozenStateError,
    RedisRunStore,
    RunNotFoundError,
    RunService,
    RunState,
)


@pytest.fixture
def store(fake_redis):
    return RedisRunStore(fake_redis)


@pytest.fixture
def service(store):
    return RunService(store)


@pytest.mark.asyncio
async def test_start_run(service, fake_redis):
    run = await service.start_run(profile_id=3)

    assert run.id == 1
    assert run.profile_id == 3
    assert run.current_state == RunState.IDLING
    assert run.error is None

    stored = json.loads(fake_redis.values["run:1"])
    assert stored["current_state"] == "idling"
    assert "1" in fake_redis.sorted_sets["profile:3:runs"]


@pytest.mark.asyncio
async def test_run_ids_are_sequential(service):
    first = await service.start_run(profile_id=1)
    second = await service.start_run(profile_id=2)

    assert (first.id, second.id) == (1, 2)


@pytest.mark.asyncio
async def test_advance_run_persists(service):
    run = await service.start_run(profile_id=3)

    advanced = await service.advance_run(run.id)

    assert advanced.current_state == RunState.GENERATING_QUESTION
    assert (await service.get_run(run.id)).current_state == RunState.GENERATING_QUESTION


@pytest.mark.asyncio
async def test_worker_drives_run_to_done(service):
    run = await service.start_run(profile_id=3)

    for _ in range(8):
        run = await service.advance_run(run.id)

    assert run.current_state == RunState.DONE
    with pytest.raises(FrozenStateError):
        await service.advance_run(run.id)


@pytest.mark.asyncio
async def test_fail_run_persists(service):
    run = await service.start_run(profile_id=3)
    await service.advance_run(run.id)

    failed = await service.fail_run(run.id, "gemini returned nothing")

    stored = await service.get_run(run.id)
    assert failed == stored
    assert stored.current_state == RunState.ERROR
    assert stored.error == "gemini returned nothing"


@pytest.mark.asyncio
async def test_failed_run_is_not_overwritten(service):
    run = await service.start_run(profile_id=3)
    await service.fail_run(run.id, "first")

    with pytest.raises(FrozenStateError):
        await service.fail_run(run.id, "second")
    with pytest.raises(FrozenStateError):
        await service.advance_run(run.id)

    assert (await service.get_run(run.id)).error == "first"


@pytest.mark.asyncio
async def test_missing_run(service):
    with pytest.raises(RunNotFoundError):
        await service.get_run(99)
    with pytest.raises(RunNotFoundError):
        await service.advance_run(99)
    with pytest.raises(RunNotFoundError):
        await service.fail_run(99, "nope")


@pytest.mark.asyncio
async def test_list_runs_oldest_first(store, service):
    later = await store.create_run(5, run_date=datetime(2026, 10, 2, tzinfo=UTC))
    earlier = await store.create_run(5, run_date=datetime(2026, 10, 1, tzinfo=UTC))
    await store.create_run(6)

    runs = await service.list_runs(5)

    assert [r.id for r in runs] == [earlier.id, later.id]


@pytest.mark.asyncio
async def test_list_runs_for_unknown_profile(service):
    assert await service.list_runs(42) == []


@pytest.mark.asyncio
async def test_get_run_unknown_id_returns_none(store):
    assert await store.get_run(1) is None
