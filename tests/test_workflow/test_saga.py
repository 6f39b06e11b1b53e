"""Tests der kompensierenden Transaktion."""

import logging

import pytest

from zugferd_de.workflow import Saga


class Recorder:
    def __init__(self) -> None:
        self.events: list[str] = []

    def action(self, name: str, result: object = None):
        async def run() -> object:
            self.events.append(f"run:{name}")
            return result

        return run

    def compensation(self, name: str):
        async def undo(result: object) -> None:
            self.events.append(f"undo:{name}:{result}")

        return undo


async def _fail() -> None:
    raise RuntimeError("Schritt kaputt")


class TestRun:
    async def test_returns_result(self) -> None:
        saga = Saga()
        recorder = Recorder()
        assert await saga.run("a", recorder.action("a", 42)) == 42
        assert saga.completed_steps == ["a"]
        assert saga.steps[0].result == 42

    async def test_failed_step_is_recorded(self) -> None:
        saga = Saga()
        with pytest.raises(RuntimeError, match="Schritt kaputt"):
            await saga.run("b", _fail)
        (step,) = saga.steps
        assert step.name == "b"
        assert step.result is None
        assert step.completed is False
        assert saga.completed_steps == []

    async def test_rejects_steps_after_rollback(self) -> None:
        saga = Saga("Test")
        await saga.compensate()
        with pytest.raises(RuntimeError, match="bereits zurückgerollt"):
            await saga.run("c", Recorder().action("c"))


class TestCompensate:
    async def test_reverse_order_including_failed_step(self) -> None:
        saga = Saga()
        recorder = Recorder()
        await saga.run("a", recorder.action("a", 1), recorder.compensation("a"))
        await saga.run("b", recorder.action("b", 2))
        with pytest.raises(RuntimeError):
            await saga.run("c", _fail, recorder.compensation("c"))

        assert await saga.compensate() == []
        assert recorder.events == ["run:a", "run:b", "undo:c:None", "undo:a:1"]
        assert saga.compensated

    async def test_failing_compensation_continues(self, caplog: pytest.LogCaptureFixture) -> None:
        saga = Saga("Rechnung 1")
        recorder = Recorder()

        async def broken(_: object) -> None:
            raise OSError("nicht erreichbar")

        await saga.run("a", recorder.action("a", "x"), recorder.compensation("a"))
        await saga.run("b", recorder.action("b"), broken)

        with caplog.at_level(logging.WARNING, logger="zugferd_de.workflow.saga"):
            failed = await saga.compensate()

        assert failed == ["b"]
        assert recorder.events[-1] == "undo:a:x"
        assert "Rechnung 1: Kompensation von b fehlgeschlagen" in caplog.text
