"""Tests for task helpers."""

import asyncio

import pytest

from utils.tasks import spawn


@pytest.mark.asyncio
async def test_spawn_returns_named_task():
    async def work():
        return 42

    task = spawn(work(), name="answer")

    assert task.get_name() == "answer"
    assert await task == 42


@pytest.mark.asyncio
async def test_spawn_logs_failures(caplog):
    async def broken():
        raise RuntimeError("kaput")

    with caplog.at_level("ERROR"):
        task = spawn(broken(), name="broken-task")
        with pytest.raises(RuntimeError):
            await task
        await asyncio.sleep(0)

    assert "broken-task failed" in caplog.text


@pytest.mark.asyncio
async def test_spawn_ignores_cancellation(caplog):
    task = spawn(asyncio.sleep(10), name="sleeper")
    await asyncio.sleep(0)
    task.cancel()

    with caplog.at_level("ERROR"):
        with pytest.raises(asyncio.CancelledError):
            await task
        await asyncio.sleep(0)

    assert "sleeper" not in caplog.text
