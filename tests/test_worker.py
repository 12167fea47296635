import asyncio
import threading

import pytest

from courtshuffle.exceptions import GenerationCancelledException, WorkerBusyException
from courtshuffle.models.round import Round
from courtshuffle.models.shuffle_config import ShuffleConfig
from courtshuffle.worker import ShuffleWorker

ROSTER = [f"p{i}" for i in range(10)]


def _payload(rounds=()):
    return {"rounds": list(rounds), "roster": ROSTER, "courts": 2}


def test_request_returns_round_dict():
    worker = ShuffleWorker(config=ShuffleConfig(round_attempts=3), seed=1)

    result = asyncio.run(worker.request(_payload()))

    new_round = Round.from_dict(result)
    assert new_round.covers(ROSTER)
    assert len(new_round.matches) == 2
    assert not worker.busy


def test_request_with_history_and_volunteers():
    worker = ShuffleWorker(config=ShuffleConfig(round_attempts=3), seed=2)
    first = asyncio.run(worker.request(_payload()))

    payload = _payload([first])
    payload["volunteers"] = ["p0"]
    second = asyncio.run(worker.request(payload))

    assert "p0" in second["sit_outs"]


def test_second_request_while_busy():
    worker = ShuffleWorker(config=ShuffleConfig(round_attempts=3), seed=3)

    async def scenario():
        first = asyncio.ensure_future(worker.request(_payload()))
        await asyncio.sleep(0)
        assert worker.busy
        with pytest.raises(WorkerBusyException):
            await worker.request(_payload())
        return await first

    result = asyncio.run(scenario())

    assert Round.from_dict(result).covers(ROSTER)
    assert not worker.busy


def test_cancel_in_flight_request():
    slow = ShuffleConfig(round_attempts=10000, round_lookahead=5)
    worker = ShuffleWorker(config=slow, seed=4)

    async def scenario():
        first = asyncio.ensure_future(worker.request(_payload()))
        await asyncio.sleep(0)
        worker.cancel()
        with pytest.raises(GenerationCancelledException):
            await first

    asyncio.run(scenario())

    assert not worker.busy


def test_cancelled_task_stays_busy_until_thread_ends(monkeypatch):
    started = threading.Event()
    release = threading.Event()

    def blocking_plan(*args, checkpoint=None, **kwargs):
        started.set()
        release.wait(5)
        checkpoint()
        return Round()

    monkeypatch.setattr("courtshuffle.worker.plan_next_round", blocking_plan)
    worker = ShuffleWorker(seed=6)

    async def scenario():
        loop = asyncio.get_running_loop()
        first = asyncio.ensure_future(worker.request(_payload()))
        assert await loop.run_in_executor(None, started.wait, 5)

        first.cancel()
        with pytest.raises(asyncio.CancelledError):
            await first

        assert worker.busy
        with pytest.raises(WorkerBusyException):
            await worker.request(_payload())

        release.set()
        for _ in range(500):
            if not worker.busy:
                break
            await asyncio.sleep(0.01)

    asyncio.run(scenario())

    assert not worker.busy


def test_cancel_when_idle_does_nothing():
    worker = ShuffleWorker(config=ShuffleConfig(round_attempts=2), seed=5)
    worker.cancel()

    result = asyncio.run(worker.request(_payload()))

    assert Round.from_dict(result).covers(ROSTER)
