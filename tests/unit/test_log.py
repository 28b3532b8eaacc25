"""Tests for caravan.log module."""

from datetime import UTC, datetime

import pytest

from caravan.errors import AttemptToWriteToClosedChannel
from caravan.log import LogChannel, LogLevel, LogMessage, render


def make_message(level: LogLevel, payload: str) -> LogMessage:
    return LogMessage(timestamp=datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC), level=level, payload=payload)


class TestLogChannel:
    @pytest.mark.asyncio
    async def test_finalize_returns_messages_in_order(self):
        log = LogChannel()
        log.info("one")
        log.debug("two")
        log.info("three")

        messages = await log.finalize()

        assert [m.payload for m in messages] == ["one", "two", "three"]
        assert [m.level for m in messages] == [LogLevel.INFO, LogLevel.DEBUG, LogLevel.INFO]

    @pytest.mark.asyncio
    async def test_messages_are_timestamped(self):
        before = datetime.now(UTC)
        log = LogChannel()
        log.info("hello")
        messages = await log.finalize()
        after = datetime.now(UTC)

        assert before <= messages[0].timestamp <= after

    @pytest.mark.asyncio
    async def test_empty_channel_finalizes_to_empty_list(self):
        log = LogChannel()
        assert await log.finalize() == ()

    @pytest.mark.asyncio
    async def test_finalize_is_idempotent(self):
        log = LogChannel()
        log.info("hello")

        first = await log.finalize()
        second = await log.finalize()

        assert first == second
        assert first is second
        assert log.is_closed

    @pytest.mark.asyncio
    async def test_write_after_finalize_always_raises(self):
        log = LogChannel()
        await log.finalize()

        for _ in range(3):
            with pytest.raises(AttemptToWriteToClosedChannel):
                log.info("late")
            with pytest.raises(AttemptToWriteToClosedChannel):
                log.debug("late")

        assert await log.finalize() == ()

    @pytest.mark.asyncio
    async def test_context_manager_finalizes_on_exit(self):
        async with LogChannel() as log:
            log.info("inside")

        assert log.is_closed
        assert [m.payload for m in await log.finalize()] == ["inside"]

    @pytest.mark.asyncio
    async def test_context_manager_finalizes_on_error(self):
        with pytest.raises(RuntimeError):
            async with LogChannel() as log:
                log.info("before")
                raise RuntimeError("boom")

        assert log.is_closed
        assert [m.payload for m in await log.finalize()] == ["before"]


class TestRender:
    def test_message_format(self):
        message = make_message(LogLevel.INFO, "hello")
        assert str(message) == "2024-01-02 03:04:05+00:00 INFO => hello"

    def test_without_filter_includes_everything_in_order(self):
        messages = [
            make_message(LogLevel.INFO, "a"),
            make_message(LogLevel.DEBUG, "b"),
            make_message(LogLevel.INFO, "c"),
        ]
        lines = render(messages).splitlines()

        assert [line.split(" => ")[1] for line in lines] == ["a", "b", "c"]
        assert "DEBUG => b" in lines[1]

    def test_info_filter_excludes_debug(self):
        messages = [
            make_message(LogLevel.DEBUG, "hidden"),
            make_message(LogLevel.INFO, "shown"),
            make_message(LogLevel.DEBUG, "also hidden"),
        ]
        rendered = render(messages, levels={LogLevel.INFO})

        assert "hidden" not in rendered
        assert "DEBUG" not in rendered
        assert rendered.endswith("INFO => shown")

    def test_empty_filter_renders_nothing(self):
        assert render([make_message(LogLevel.INFO, "a")], []) == ""

    def test_no_messages(self):
        assert render([]) == ""
