"""Classification of attribution SDK callbacks.

Two independent axes:

* install conversion: fires at most once per install and moves the
  classifier from ``UNKNOWN`` to ``ORGANIC`` or ``NON_ORGANIC`` for good;
* deep links: every callback is classified on its own, with no memory of
  previous ones.

Nothing here raises to the SDK callback that invoked it.  Malformed
payloads are logged at DEBUG level and ignored.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError

from pyattrib import events as _events
from pyattrib._redact import redact_for_log
from pyattrib.dispatcher import EventDispatcher
from pyattrib.events import Event
from pyattrib.models.conversion import ConversionPayload, ConversionStatus
from pyattrib.models.deep_link import DeepLinkPayload
from pyattrib.models.outcome import DispatchResult

_logger = logging.getLogger(__name__)

TModel = TypeVar("TModel", bound=BaseModel)


class InstallAttribution(BaseModel):
    """Where the current install came from, once known."""

    model_config = ConfigDict(frozen=True)

    status: ConversionStatus = ConversionStatus.UNKNOWN
    media_source: str | None = None
    campaign: str | None = None

    @property
    def is_known(self) -> bool:
        return self.status != ConversionStatus.UNKNOWN

    @property
    def is_organic(self) -> bool:
        return self.status == ConversionStatus.ORGANIC


def _parse(model_cls: type[TModel], payload: Any) -> TModel | None:
    if isinstance(payload, model_cls):
        return payload
    if not isinstance(payload, Mapping):
        _logger.debug("Ignoring %s callback with non-mapping payload: %r", model_cls.__name__, type(payload))
        return None
    try:
        return model_cls.model_validate(dict(payload))
    except ValidationError:
        _logger.debug("Ignoring malformed %s callback: %s", model_cls.__name__, redact_for_log(payload), exc_info=True)
        return None


def classify_deep_link(payload: DeepLinkPayload | Mapping[str, Any]) -> Event | None:
    """Map a deep-link callback to the event it should produce, if any.

    ``FOUND`` + deferred yields ``deferred_deep_link``; ``FOUND`` otherwise
    yields ``deep_link_opened``; every other status yields ``None``.
    """
    parsed = _parse(DeepLinkPayload, payload)
    if parsed is None or not parsed.found:
        return None
    if parsed.data is None:
        _logger.debug("Deep link FOUND without data section; ignoring")
        return None

    data = parsed.data
    build = _events.deferred_deep_link if parsed.is_deferred else _events.deep_link_opened
    return build(
        deep_link_value=data.deep_link_value,
        media_source=data.media_source,
        campaign=data.campaign,
    )


class AttributionClassifier:
    """Consumes SDK callbacks and emits derived events.

    Hosts register :meth:`on_conversion_data` and :meth:`on_deep_link`
    with their attribution SDK wrapper.  ``on_non_organic`` is a hook for
    personalisation: it receives the :class:`InstallAttribution` once a
    paid install is confirmed.
    """

    def __init__(
        self,
        dispatcher: EventDispatcher | None = None,
        *,
        on_non_organic: Callable[[InstallAttribution], None] | None = None,
    ) -> None:
        self._dispatcher = dispatcher
        self._on_non_organic = on_non_organic
        self._install = InstallAttribution()

    @property
    def install_attribution(self) -> InstallAttribution:
        return self._install

    def on_conversion_data(self, payload: ConversionPayload | Mapping[str, Any]) -> InstallAttribution:
        """Record the install's attribution status.

        Only the first callback carrying a recognised ``af_status`` moves
        the state; later ones are logged and ignored.
        """
        parsed = _parse(ConversionPayload, payload)
        if parsed is None or parsed.data is None:
            _logger.debug("Conversion callback without data section; ignoring")
            return self._install

        data = parsed.data
        if data.af_status == ConversionStatus.UNKNOWN:
            _logger.debug("Conversion callback with unrecognised af_status: %s", redact_for_log(data.raw))
            return self._install

        if self._install.is_known:
            _logger.debug(
                "Install already classified as %s; ignoring %s callback",
                self._install.status,
                data.af_status,
            )
            return self._install

        self._install = InstallAttribution(
            status=data.af_status,
            media_source=data.media_source,
            campaign=data.campaign,
        )

        if self._install.is_organic:
            _logger.info("Organic install")
            return self._install

        _logger.info(
            "Non-organic install: media_source=%s campaign=%s",
            self._install.media_source,
            self._install.campaign,
        )
        if self._on_non_organic is not None:
            try:
                self._on_non_organic(self._install)
            except Exception:
                _logger.warning("on_non_organic callback failed", exc_info=True)
        return self._install

    async def on_deep_link(
        self,
        payload: DeepLinkPayload | Mapping[str, Any],
        *,
        dispatcher: EventDispatcher | None = None,
    ) -> DispatchResult | None:
        """Classify a deep-link callback and dispatch the derived event.

        *dispatcher* overrides the bound one for this call, so the host can
        pass the dispatcher bound to its current identity.
        """
        event = classify_deep_link(payload)
        if event is None:
            return None

        target = dispatcher if dispatcher is not None else self._dispatcher
        if target is None:
            _logger.warning("Deep link classified as %s but no dispatcher is bound", event.name)
            return None

        _logger.info("Deep link classified as %s", event.name)
        return await target.dispatch_event(event)
