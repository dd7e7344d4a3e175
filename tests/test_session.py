"""Tests for superseding generation sessions."""
import asyncio
import threading
import time

from boxgen.services.session import GenerationSession, SessionRegistry

from conftest import RecordingEngine


class SlowEngine(RecordingEngine):
    """Sleeps inside box() and tracks how many passes overlap."""

    def __init__(self, delay=0.05):
        super().__init__()
        self.delay = delay
        self.active = 0
        self.peak = 0
        self.passes = 0
        self._guard = threading.Lock()

    def box(self, size, center):
        with self._guard:
            self.active += 1
            self.peak = max(self.peak, self.active)
            self.passes += 1
        time.sleep(self.delay)
        with self._guard:
            self.active -= 1
        return super().box(size, center)


class TestGenerationSession:

    def test_single_submit(self, scenario_a, engine):
        session = GenerationSession(engine)
        result, stale = asyncio.run(session.submit(scenario_a))
        assert not stale
        assert result.success
        assert session.ticket == 1

    def test_newer_submission_supersedes(self, scenario_a, engine):
        session = GenerationSession(engine)
        older = scenario_a.replace(box_width=30.0)
        newer = scenario_a.replace(box_width=40.0)

        async def run():
            return await asyncio.gather(session.submit(older), session.submit(newer))

        (first, first_stale), (second, second_stale) = asyncio.run(run())
        assert first_stale
        assert not second_stale
        assert second.report.width == 40.0

    def test_one_pass_in_flight(self, scenario_a):
        engine = SlowEngine()
        session = GenerationSession(engine)

        async def run():
            return await asyncio.gather(*(session.submit(scenario_a) for _ in range(3)))

        results = asyncio.run(run())
        assert engine.peak == 1
        assert [stale for _, stale in results] == [True, True, False]
        # the middle submission was superseded before its turn and never ran
        assert results[1][0] is None
        assert results[2][0].success

    def test_session_holds_no_result(self, scenario_a, engine):
        session = GenerationSession(engine)
        asyncio.run(session.submit(scenario_a))
        assert not any(
            hasattr(value, "solid") for value in vars(session).values()
        )

    def test_invalid_result_is_returned(self, scenario_a, engine):
        session = GenerationSession(engine)
        result, stale = asyncio.run(session.submit(scenario_a.replace(box_width=-1.0)))
        assert not stale
        assert not result.success


class TestSessionRegistry:

    def test_same_id_same_session(self):
        registry = SessionRegistry()
        assert registry.get("a") is registry.get("a")

    def test_evicts_oldest(self):
        registry = SessionRegistry(max_sessions=2)
        registry.get("a")
        registry.get("b")
        registry.get("a")
        registry.get("c")
        assert len(registry) == 2
        assert "a" in registry
        assert "b" not in registry
