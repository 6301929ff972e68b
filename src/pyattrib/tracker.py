"""High-level tracker used by the host app.

Wires configuration, sinks, identity and attribution together and maps
app lifecycle moments (first launch, sign-up, log-out) onto events.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

import aiohttp

from pyattrib.attribution import AttributionClassifier, InstallAttribution
from pyattrib.config import TrackingConfig
from pyattrib.dispatcher import EventDispatcher
from pyattrib.exceptions import AttribError, HashingError
from pyattrib.identity import Identity
from pyattrib.models.outcome import DispatchResult
from pyattrib.sinks import build_sinks
from pyattrib.sinks.base import BackendSink
from pyattrib.storage import FlagStore, InMemoryFlagStore

_logger = logging.getLogger(__name__)


class AppTracker:
    """Async analytics/attribution tracker.

    Usage::

        async with AppTracker(TrackingConfig.from_env()) as tracker:
            await tracker.track_app_launch()
            await tracker.sign_up("user@example.com")
            await tracker.deposit(50, "usd")

    Passing ``sinks`` skips building the HTTP sinks from configuration,
    in which case the tracker is usable without entering the context.
    """

    def __init__(
        self,
        config: TrackingConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        sinks: Iterable[BackendSink] | None = None,
        flags: FlagStore | None = None,
        on_non_organic: Callable[[InstallAttribution], None] | None = None,
    ) -> None:
        self._config = config if config is not None else TrackingConfig()
        self._external_session = session is not None
        self._http_session = session
        self._flags: FlagStore = flags if flags is not None else InMemoryFlagStore()
        self._owns_sinks = sinks is None
        self._dispatcher: EventDispatcher | None = EventDispatcher(sinks) if sinks is not None else None
        self._classifier = AttributionClassifier(on_non_organic=on_non_organic)

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> AppTracker:
        if self._dispatcher is None:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._dispatcher = EventDispatcher(build_sinks(self._config, self._http_session))
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if self._owns_sinks:
            # Built sinks hold the closed session.
            self._dispatcher = None

    def _require_dispatcher(self) -> EventDispatcher:
        if self._dispatcher is None:
            raise AttribError("Tracker not initialized. Use 'async with AppTracker(...) as tracker:'")
        return self._dispatcher

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def dispatcher(self) -> EventDispatcher:
        return self._require_dispatcher()

    @property
    def identity(self) -> Identity:
        return self._require_dispatcher().identity

    @property
    def install_attribution(self) -> InstallAttribution:
        return self._classifier.install_attribution

    def set_identity(self, email: str) -> bool:
        """Bind the hash of *email*; returns ``False`` if it could not be hashed.

        On failure the previous identity stays bound.
        """
        dispatcher = self._require_dispatcher()
        try:
            self._dispatcher = dispatcher.with_email(email)
        except HashingError as exc:
            _logger.warning("Identity update rejected: %s", exc)
            return False
        return True

    def clear_identity(self) -> None:
        self._dispatcher = self._require_dispatcher().without_identity()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def track_app_launch(self) -> DispatchResult | None:
        """Fire ``app_install`` on the first launch after installation."""
        dispatcher = self._require_dispatcher()
        try:
            first_launch = await self._flags.is_first_launch()
        except Exception:
            _logger.error("[Storage] Error checking first launch", exc_info=True)
            return None
        if not first_launch:
            return None

        result = await dispatcher.log_app_install()
        try:
            await self._flags.mark_app_launched()
        except Exception:
            _logger.error("[Storage] Error marking app launched", exc_info=True)
        return result

    async def sign_up(self, email: str) -> DispatchResult:
        """Bind the new user's identity and fire ``user_sign_up``.

        If the e-mail cannot be hashed the event is still sent, without
        ``hashed_email``; a previously bound identity is never reused.
        """
        if not self.set_identity(email):
            self.clear_identity()
        result = await self._require_dispatcher().log_user_sign_up()
        try:
            await self._flags.mark_user_signed_up()
        except Exception:
            _logger.error("[Storage] Error marking user signed up", exc_info=True)
        return result

    async def is_signed_up(self) -> bool:
        try:
            return await self._flags.is_user_signed_up()
        except Exception:
            _logger.error("[Storage] Error checking sign-up flag", exc_info=True)
            return False

    async def log_out(self) -> None:
        """Forget the identity and reset local flags."""
        self.clear_identity()
        try:
            await self._flags.clear_all()
        except Exception:
            _logger.error("[Storage] Error clearing storage", exc_info=True)

    # ------------------------------------------------------------------
    # Named events
    # ------------------------------------------------------------------

    async def deposit(self, value: float, currency: str) -> DispatchResult:
        return await self._require_dispatcher().log_deposit(value, currency)

    async def create_instance(self, product_id: str) -> DispatchResult:
        return await self._require_dispatcher().log_create_instance(product_id)

    async def screen_view(self, screen_name: str, screen_class: str | None = None) -> DispatchResult:
        return await self._require_dispatcher().log_screen_view(screen_name, screen_class)

    async def track(self, event_name: str, params: Mapping[str, Any] | None = None) -> DispatchResult:
        return await self._require_dispatcher().dispatch(event_name, params)

    # ------------------------------------------------------------------
    # Attribution SDK callbacks
    # ------------------------------------------------------------------

    def on_conversion_data(self, payload: Mapping[str, Any]) -> InstallAttribution:
        return self._classifier.on_conversion_data(payload)

    async def on_deep_link(self, payload: Mapping[str, Any]) -> DispatchResult | None:
        return await self._classifier.on_deep_link(payload, dispatcher=self._require_dispatcher())
