from __future__ import annotations

import asyncio
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import pytest

from pyattrib.dispatcher import EventDispatcher
from pyattrib.exceptions import HashingError, SinkTransportError
from pyattrib.identity import Identity, hash_email


@dataclass
class RecordingSink:
    name: str = "recording"
    calls: list[tuple[str, dict[str, Any]]] = field(default_factory=list)

    async def log_event(self, name: str, params: Mapping[str, Any]) -> None:
        self.calls.append((name, dict(params)))


@dataclass
class FailingSink:
    name: str = "failing"
    error: Exception = field(default_factory=lambda: RuntimeError("sdk not initialised"))
    attempts: int = 0

    async def log_event(self, name: str, params: Mapping[str, Any]) -> None:
        self.attempts += 1
        raise self.error


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def failing_sink() -> FailingSink:
    return FailingSink()


@dataclass
class ScreenRecordingSink(RecordingSink):
    """Firebase-style double with a dedicated screen-view call."""

    name: str = "screens"
    screen_views: list[tuple[str, str]] = field(default_factory=list)

    async def log_screen_view(self, screen_name: str, screen_class: str) -> None:
        self.screen_views.append((screen_name, screen_class))


@pytest.mark.asyncio
async def test_dispatch_reaches_every_sink_with_identical_params() -> None:
    first = RecordingSink(name="firebase")
    second = RecordingSink(name="meta")
    dispatcher = EventDispatcher([first, second]).with_email("user@example.com")

    result = await dispatcher.dispatch("create_instance", {"product_id": "vps-1"})

    expected = {"product_id": "vps-1", "hashed_email": hash_email("user@example.com")}
    assert first.calls == [("create_instance", expected)]
    assert second.calls == [("create_instance", expected)]
    assert result.params == expected
    assert result.all_ok
    assert sorted(result.succeeded) == ["firebase", "meta"]


@pytest.mark.asyncio
async def test_dispatch_never_raises_when_every_sink_fails() -> None:
    sinks = [
        FailingSink(name="a"),
        FailingSink(name="b", error=SinkTransportError("HTTP 500", sink="b", status_code=500)),
        FailingSink(name="c", error=ValueError("rejected payload")),
    ]
    dispatcher = EventDispatcher(sinks)

    result = await dispatcher.dispatch("app_install")

    assert sorted(result.failed) == ["a", "b", "c"]
    assert result.outcomes["c"].error == "ValueError: rejected payload"
    assert all(sink.attempts == 1 for sink in sinks)


@pytest.mark.asyncio
async def test_failing_sink_does_not_block_others(
    recording_sink: RecordingSink,
    failing_sink: FailingSink,
) -> None:
    dispatcher = EventDispatcher([failing_sink, recording_sink])

    result = await dispatcher.dispatch("app_install")

    assert recording_sink.calls == [("app_install", {})]
    assert result.outcomes["failing"].ok is False
    assert result.outcomes["recording"].ok is True


@pytest.mark.asyncio
async def test_slow_sink_is_awaited_alongside_fast_ones() -> None:
    order: list[str] = []

    class _SlowSink:
        name = "slow"

        async def log_event(self, name: str, params: Mapping[str, Any]) -> None:
            await asyncio.sleep(0.01)
            order.append("slow")

    class _FastSink:
        name = "fast"

        async def log_event(self, name: str, params: Mapping[str, Any]) -> None:
            order.append("fast")

    result = await EventDispatcher([_SlowSink(), _FastSink()]).dispatch("app_install")

    assert order == ["fast", "slow"]
    assert result.all_ok


@pytest.mark.asyncio
async def test_deposit_merges_identity_and_upper_cases_currency(recording_sink: RecordingSink) -> None:
    dispatcher = EventDispatcher([recording_sink], identity=Identity.from_email("user@example.com"))

    await dispatcher.log_deposit(50, "usd")

    assert recording_sink.calls == [
        ("deposit", {"value": 50, "currency": "USD", "hashed_email": hash_email("user@example.com")})
    ]


@pytest.mark.asyncio
async def test_anonymous_dispatch_omits_hashed_email_key(recording_sink: RecordingSink) -> None:
    dispatcher = EventDispatcher([recording_sink]).with_email("user@example.com").without_identity()

    result = await dispatcher.log_deposit(50, "usd")

    assert "hashed_email" not in recording_sink.calls[0][1]
    assert "hashed_email" not in result.params


@pytest.mark.asyncio
async def test_caller_supplied_hashed_email_is_dropped_when_anonymous(recording_sink: RecordingSink) -> None:
    await EventDispatcher([recording_sink]).dispatch("app_install", {"hashed_email": "stale"})

    assert recording_sink.calls == [("app_install", {})]


@pytest.mark.asyncio
async def test_dispatch_does_not_mutate_caller_params(recording_sink: RecordingSink) -> None:
    params = {"product_id": "vps-1"}
    await EventDispatcher([recording_sink]).with_email("a@b.com").dispatch("create_instance", params)

    assert params == {"product_id": "vps-1"}


def test_with_email_returns_new_dispatcher_and_keeps_original() -> None:
    base = EventDispatcher([])
    bound = base.with_email("a@b.com")

    assert base.identity.is_anonymous
    assert bound.identity.hashed_email == hash_email("a@b.com")
    assert bound.sinks == base.sinks


def test_with_email_rejects_unhashable_email() -> None:
    base = EventDispatcher([]).with_email("a@b.com")
    with pytest.raises(HashingError):
        base.with_email("   ")
    assert base.identity.hashed_email == hash_email("a@b.com")


@pytest.mark.asyncio
async def test_screen_view_uses_dedicated_call_where_available() -> None:
    firebase = ScreenRecordingSink(name="firebase")
    meta = RecordingSink(name="meta")
    dispatcher = EventDispatcher([firebase, meta])

    await dispatcher.log_screen_view("Deposit")

    assert firebase.screen_views == [("Deposit", "Deposit")]
    assert firebase.calls == []
    assert meta.calls == [("screen_view", {"screen_name": "Deposit"})]


@pytest.mark.asyncio
async def test_screen_view_explicit_class_not_leaked_to_generic_sinks() -> None:
    firebase = ScreenRecordingSink(name="firebase")
    meta = RecordingSink(name="meta")

    await EventDispatcher([firebase, meta]).log_screen_view("Deposit", "DepositScreen")

    assert firebase.screen_views == [("Deposit", "DepositScreen")]
    assert meta.calls == [("screen_view", {"screen_name": "Deposit"})]


@pytest.mark.asyncio
async def test_duplicate_sink_names_get_distinct_outcome_keys() -> None:
    result = await EventDispatcher([RecordingSink(), RecordingSink()]).dispatch("app_install")

    assert sorted(result.outcomes) == ["recording", "recording#2"]


@pytest.mark.asyncio
async def test_no_sinks_still_resolves() -> None:
    result = await EventDispatcher([]).log_app_install()

    assert result.event == "app_install"
    assert result.outcomes == {}
