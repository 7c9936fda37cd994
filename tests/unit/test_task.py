"""Unit tests for Task timeout and retry control."""
import asyncio
import time
from unittest.mock import AsyncMock, MagicMock

import pytest

from batAgent.errors import RetryExhausted, TimeoutExceeded
from batAgent.tasks import DEFAULT_RETRY_CONFIG, RetryConfig, Task, TaskPriority, TaskStatus
from batAgent.utils import TaskLogger


def make_agent(*outcomes, role="Worker"):
    """Agent mock whose execute() yields ``outcomes`` in order."""
    agent = MagicMock()
    agent.role = role
    agent.execute = AsyncMock(side_effect=list(outcomes))
    return agent


class TestTaskPriority:
    def test_weights(self):
        assert TaskPriority.HIGH.weight == 3
        assert TaskPriority.MEDIUM.weight == 2
        assert TaskPriority.LOW.weight == 1

    def test_from_string(self):
        task = Task("t", make_agent("ok"), priority="high")
        assert task.get_priority() is TaskPriority.HIGH

    def test_default_is_medium(self):
        task = Task("t", make_agent("ok"))
        assert task.priority is TaskPriority.MEDIUM

    def test_unknown_priority_rejected(self):
        with pytest.raises(ValueError):
            Task("t", make_agent("ok"), priority="urgent")


class TestRetryConfig:
    def test_defaults(self):
        assert DEFAULT_RETRY_CONFIG.max_retries == 3
        assert DEFAULT_RETRY_CONFIG.retry_delay_ms == 1000

    @pytest.mark.parametrize("max_retries", [0, -1])
    def test_max_retries_must_be_positive(self, max_retries):
        with pytest.raises(ValueError, match="max_retries"):
            RetryConfig(max_retries=max_retries)

    def test_negative_delay_rejected(self):
        with pytest.raises(ValueError, match="retry_delay_ms"):
            RetryConfig(retry_delay_ms=-5)

    @pytest.mark.parametrize("timeout_ms", [0, -100])
    def test_timeout_must_be_positive(self, timeout_ms):
        with pytest.raises(ValueError, match="timeout_ms"):
            Task("t", make_agent("ok"), timeout_ms=timeout_ms)


class TestTaskRun:
    @pytest.mark.asyncio
    async def test_first_attempt_success(self):
        """A successful first attempt returns the agent result unchanged"""
        agent = make_agent("done")
        task = Task("Summarize", agent, retry_config=RetryConfig(3, 0))

        result = await task.run()

        assert result == "done"
        assert task.status is TaskStatus.COMPLETED
        assert task.attempt_count == 0
        agent.execute.assert_awaited_once_with("Summarize", ())

    @pytest.mark.asyncio
    async def test_passes_available_agents(self):
        agent = make_agent("done")
        peers = (MagicMock(), MagicMock())
        task = Task("t", agent, available_agents=peers)

        await task.run()

        agent.execute.assert_awaited_once_with("t", peers)

    @pytest.mark.asyncio
    async def test_forwards_injected_settings(self, fast_settings):
        agent = make_agent("done")
        task = Task("t", agent, settings=fast_settings)

        await task.run()

        agent.execute.assert_awaited_once_with("t", (), settings=fast_settings)

    @pytest.mark.asyncio
    async def test_succeeds_after_failures(self):
        agent = make_agent(RuntimeError("flaky"), RuntimeError("flaky"), "recovered")
        task = Task("t", agent, retry_config=RetryConfig(max_retries=3, retry_delay_ms=0))

        assert await task.run() == "recovered"
        assert agent.execute.await_count == 3
        assert task.attempt_count == 2
        assert task.status is TaskStatus.COMPLETED

    @pytest.mark.asyncio
    @pytest.mark.parametrize("max_retries", [1, 2, 4])
    async def test_exact_attempt_count_on_persistent_failure(self, max_retries):
        """Exactly max_retries attempts are made, never one more"""
        agent = make_agent(*[ValueError(f"bad {i}") for i in range(max_retries + 2)])
        task = Task("t", agent, retry_config=RetryConfig(max_retries=max_retries, retry_delay_ms=0))

        with pytest.raises(RetryExhausted) as exc_info:
            await task.run()

        assert agent.execute.await_count == max_retries
        assert exc_info.value.attempts == max_retries
        assert exc_info.value.attempt_count == max_retries
        assert str(exc_info.value.last_error) == f"bad {max_retries - 1}"
        assert task.status is TaskStatus.FAILED
        assert task.attempt_count == max_retries

    @pytest.mark.asyncio
    async def test_single_attempt_has_no_delay(self):
        agent = make_agent(ValueError("nope"))
        task = Task("t", agent, retry_config=RetryConfig(max_retries=1, retry_delay_ms=5000))

        start = time.monotonic()
        with pytest.raises(RetryExhausted):
            await task.run()

        assert time.monotonic() - start < 1.0
        agent.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_fixed_delay_between_attempts(self):
        agent = make_agent(ValueError("1"), ValueError("2"), "ok")
        task = Task("t", agent, retry_config=RetryConfig(max_retries=3, retry_delay_ms=50))

        start = time.monotonic()
        await task.run()

        assert time.monotonic() - start >= 0.09

    @pytest.mark.asyncio
    async def test_error_message_includes_attempts(self):
        agent = make_agent(ValueError("broken"), ValueError("broken"))
        task = Task("t", agent, retry_config=RetryConfig(max_retries=2, retry_delay_ms=0))

        with pytest.raises(RetryExhausted, match="after 2 attempts: broken"):
            await task.run()

    @pytest.mark.asyncio
    async def test_rerun_resets_attempt_count(self):
        agent = make_agent(ValueError("x"), "first", "second")
        task = Task("t", agent, retry_config=RetryConfig(max_retries=2, retry_delay_ms=0))

        assert await task.run() == "first"
        assert task.attempt_count == 1
        assert await task.run() == "second"
        assert task.attempt_count == 0


class TestTaskTimeout:
    @pytest.mark.asyncio
    async def test_timeout_fires_and_cancels_attempt(self):
        """A hung attempt is cancelled at the deadline"""
        cancelled = asyncio.Event()

        async def hang(description, available_agents):
            try:
                await asyncio.Event().wait()
            except asyncio.CancelledError:
                cancelled.set()
                raise

        agent = MagicMock()
        agent.role = "Sleeper"
        agent.execute = hang
        task = Task("t", agent, timeout_ms=100, retry_config=RetryConfig(max_retries=1, retry_delay_ms=0))

        start = time.monotonic()
        with pytest.raises(RetryExhausted) as exc_info:
            await task.run()
        elapsed = time.monotonic() - start

        assert 0.09 <= elapsed < 1.0
        assert isinstance(exc_info.value.last_error, TimeoutExceeded)
        assert "timed out after 100ms" in str(exc_info.value)
        assert cancelled.is_set()

    @pytest.mark.asyncio
    async def test_timeout_applies_per_attempt(self):
        """Each attempt gets the full timeout; time is not shared across attempts"""
        calls = []

        async def slow_then_fail(description, available_agents):
            calls.append(time.monotonic())
            await asyncio.sleep(0.06)
            raise ValueError("slow failure")

        agent = MagicMock()
        agent.role = "Slow"
        agent.execute = slow_then_fail
        task = Task("t", agent, timeout_ms=100, retry_config=RetryConfig(max_retries=3, retry_delay_ms=0))

        with pytest.raises(RetryExhausted) as exc_info:
            await task.run()

        assert len(calls) == 3
        assert isinstance(exc_info.value.last_error, ValueError)

    @pytest.mark.asyncio
    async def test_timeout_is_retried(self):
        async def first_hangs(description, available_agents):
            if not first_hangs.called:
                first_hangs.called = True
                await asyncio.sleep(5)
            return "second try"

        first_hangs.called = False
        agent = MagicMock()
        agent.role = "Retry"
        agent.execute = first_hangs
        task = Task("t", agent, timeout_ms=50, retry_config=RetryConfig(max_retries=2, retry_delay_ms=0))

        assert await task.run() == "second try"
        assert task.attempt_count == 1


class TestTaskLogging:
    @pytest.mark.asyncio
    async def test_lifecycle_records(self):
        logger = TaskLogger()
        agent = make_agent(ValueError("boom"), "ok")
        task = Task("Write report", agent, logger=logger, retry_config=RetryConfig(2, 0))

        await task.run()
        logs = logger.get_logs()

        assert any("TASK [STARTED]: Write report" in line for line in logs)
        assert any("TASK [RETRYING]" in line and "Attempt 1/2: boom" in line for line in logs)
        assert any("TASK [COMPLETED]" in line and "Result: ok" in line for line in logs)
        assert any("AGENT [Worker]: attempt 2/2: Write report" in line for line in logs)

    @pytest.mark.asyncio
    async def test_failure_record(self):
        logger = TaskLogger()
        task = Task("t", make_agent(ValueError("boom")), logger=logger, retry_config=RetryConfig(1, 0))

        with pytest.raises(RetryExhausted):
            await task.run()

        assert "TASK [FAILED]" in logger.get_logs()[-1]
