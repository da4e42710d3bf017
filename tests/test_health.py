"""Unit tests for health checks."""

import asyncio

import pytest

from core.generator import FloatingTimeGenerator
from core.health import (
    CheckResult,
    HealthChecker,
    Status,
    check_event_loop,
    create_generator_check,
)

DAY_MS = 86_400_000


class TestGeneratorCheck:
    """Tests for time-field headroom check."""

    @pytest.mark.asyncio
    async def test_plenty_of_headroom(self, clock):
        gen = FloatingTimeGenerator(time_length=45, time_offset=0, clock=clock)
        result = await create_generator_check(gen, 365 * DAY_MS)()
        assert result.status == Status.OK
        assert result.msg == "45bit"

    @pytest.mark.asyncio
    async def test_inside_warning_window(self, clock):
        # 2**31 ms is roughly 24 days
        gen = FloatingTimeGenerator(time_length=31, time_offset=clock.now - 1000, clock=clock)
        result = await create_generator_check(gen, 365 * DAY_MS)()
        assert result.status == Status.DEGRADED

    @pytest.mark.asyncio
    async def test_overflowed(self, clock):
        gen = FloatingTimeGenerator(time_length=10, time_offset=clock.now, clock=clock)
        clock.advance(2 ** 10)
        result = await create_generator_check(gen, 0)()
        assert result.status == Status.FAIL
        assert "overflowed" in result.msg


class TestHealthChecker:
    """Tests for HealthChecker aggregation."""

    @pytest.mark.asyncio
    async def test_all_ok(self):
        checker = HealthChecker()
        checker.register("loop", check_event_loop)
        report = await checker.check()
        assert report.status == Status.OK
        assert report.to_dict()["checks"][0]["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_critical_failure(self):
        checker = HealthChecker()

        async def failing():
            raise RuntimeError("boom")

        checker.register("bad", failing, critical=True)
        report = await checker.check()
        assert report.status == Status.FAIL
        assert report.checks[0].msg == "boom"

    @pytest.mark.asyncio
    async def test_non_critical_failure_degrades(self):
        checker = HealthChecker()

        async def failing():
            return CheckResult("bad", Status.FAIL, "nope")

        checker.register("loop", check_event_loop)
        checker.register("bad", failing, critical=False)
        report = await checker.check()
        assert report.status == Status.DEGRADED

    @pytest.mark.asyncio
    async def test_timeout(self):
        checker = HealthChecker(timeout=0.01)

        async def slow():
            await asyncio.sleep(1)

        checker.register("slow", slow)
        report = await checker.check()
        assert report.checks[0].msg == "timeout"

    @pytest.mark.asyncio
    async def test_report_cached(self):
        checker = HealthChecker(ttl=60)
        checker.register("loop", check_event_loop)
        first = await checker.check()
        second = await checker.check()
        assert first is second
