"""Event fan-out to every registered backend sink."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from pyattrib import events as _events
from pyattrib._constants import HASHED_EMAIL_KEY
from pyattrib._redact import redact_for_log
from pyattrib.events import Event, EventName
from pyattrib.identity import Identity
from pyattrib.models.outcome import DispatchResult, SinkOutcome
from pyattrib.sinks.base import BackendSink

_logger = logging.getLogger(__name__)


def _sink_names(sinks: Sequence[BackendSink]) -> list[str]:
    """Stable, unique outcome keys for *sinks* (``name``, ``name#2``, ...)."""
    names: list[str] = []
    seen: dict[str, int] = {}
    for sink in sinks:
        base = str(getattr(sink, "name", "") or type(sink).__name__)
        count = seen.get(base, 0) + 1
        seen[base] = count
        names.append(base if count == 1 else f"{base}#{count}")
    return names


class EventDispatcher:
    """Fans events out to independent sinks, isolating failures per sink.

    The dispatcher is bound to one :class:`Identity`; the ``with_*``
    methods return a new dispatcher sharing the same sinks, so identity
    changes never mutate state other callers can observe.

    Usage::

        dispatcher = EventDispatcher([firebase, meta, appsflyer])
        dispatcher = dispatcher.with_email("user@example.com")
        result = await dispatcher.log_deposit(50, "usd")
        result.failed  # -> names of sinks that raised
    """

    def __init__(
        self,
        sinks: Iterable[BackendSink],
        *,
        identity: Identity | None = None,
    ) -> None:
        self._sinks: tuple[BackendSink, ...] = tuple(sinks)
        self._names: tuple[str, ...] = tuple(_sink_names(self._sinks))
        self._identity = identity if identity is not None else Identity.anonymous()

    # ------------------------------------------------------------------
    # Identity binding
    # ------------------------------------------------------------------

    @property
    def identity(self) -> Identity:
        return self._identity

    @property
    def sinks(self) -> tuple[BackendSink, ...]:
        return self._sinks

    def with_identity(self, identity: Identity) -> EventDispatcher:
        return EventDispatcher(self._sinks, identity=identity)

    def with_email(self, email: str) -> EventDispatcher:
        """Return a dispatcher bound to the hash of *email*.

        Raises :class:`~pyattrib.exceptions.HashingError` if the address
        cannot be hashed; ``self`` is left untouched in that case.
        """
        return self.with_identity(Identity.from_email(email))

    def without_identity(self) -> EventDispatcher:
        return self.with_identity(self._identity.cleared())

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def merge_identity(self, params: Mapping[str, Any] | None) -> dict[str, Any]:
        """Copy *params* and merge ``hashed_email`` from the bound identity.

        When the identity is anonymous the key is removed entirely.
        """
        merged: dict[str, Any] = dict(params or {})
        if self._identity.hashed_email is not None:
            merged[HASHED_EMAIL_KEY] = self._identity.hashed_email
        else:
            merged.pop(HASHED_EMAIL_KEY, None)
        return merged

    async def dispatch(self, event_name: str, params: Mapping[str, Any] | None = None) -> DispatchResult:
        """Send one event to every sink and report per-sink outcomes.

        Never raises for sink failures: each sink call is awaited
        concurrently and its exception, if any, is logged and recorded.
        """
        merged = self.merge_identity(params)

        screen_class: str | None = None
        if event_name == EventName.SCREEN_VIEW:
            screen_class = merged.pop("screen_class", None)

        _logger.debug("Dispatching %s to %d sink(s): %s", event_name, len(self._sinks), redact_for_log(merged))

        outcomes = await asyncio.gather(
            *(
                self._invoke(name, sink, event_name, merged, screen_class)
                for name, sink in zip(self._names, self._sinks, strict=True)
            )
        )
        return DispatchResult(
            event=str(event_name),
            params=merged,
            outcomes={outcome.sink: outcome for outcome in outcomes},
        )

    async def dispatch_event(self, event: Event) -> DispatchResult:
        return await self.dispatch(event.name, event.params)

    async def _invoke(
        self,
        sink_name: str,
        sink: BackendSink,
        event_name: str,
        params: dict[str, Any],
        screen_class: str | None,
    ) -> SinkOutcome:
        try:
            log_screen_view = getattr(sink, "log_screen_view", None)
            if event_name == EventName.SCREEN_VIEW and callable(log_screen_view):
                screen_name = str(params.get("screen_name", ""))
                await log_screen_view(screen_name, screen_class or screen_name)
            else:
                # Each sink gets its own copy of the params.
                await sink.log_event(str(event_name), dict(params))
        except Exception as exc:
            _logger.warning("[%s] Error firing %s: %s", sink_name, event_name, exc)
            _logger.debug("[%s] %s failure details", sink_name, event_name, exc_info=True)
            return SinkOutcome(sink=sink_name, ok=False, error=f"{type(exc).__name__}: {exc}")
        _logger.debug("[%s] %s event fired", sink_name, event_name)
        return SinkOutcome(sink=sink_name, ok=True)

    # ------------------------------------------------------------------
    # Named events
    # ------------------------------------------------------------------

    async def log_app_install(self) -> DispatchResult:
        return await self.dispatch_event(_events.app_install())

    async def log_user_sign_up(self) -> DispatchResult:
        return await self.dispatch_event(_events.user_sign_up())

    async def log_deposit(self, value: float, currency: str) -> DispatchResult:
        return await self.dispatch_event(_events.deposit(value, currency))

    async def log_create_instance(self, product_id: str) -> DispatchResult:
        return await self.dispatch_event(_events.create_instance(product_id))

    async def log_screen_view(self, screen_name: str, screen_class: str | None = None) -> DispatchResult:
        params: dict[str, Any] = dict(_events.screen_view(screen_name).params)
        if screen_class:
            params["screen_class"] = screen_class
        return await self.dispatch(EventName.SCREEN_VIEW, params)
