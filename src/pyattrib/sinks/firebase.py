"""Firebase analytics sink (GA4 Measurement Protocol for Firebase apps)."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import aiohttp

from pyattrib._constants import FIREBASE_COLLECT_URL
from pyattrib.config import FirebaseSettings
from pyattrib.exceptions import AttribConfigError
from pyattrib.sinks._http import JsonHttpTransport


class FirebaseSink:
    """Sends events to Firebase via the Measurement Protocol.

    Usage::

        sink = FirebaseSink(config.firebase, http_session)
        await sink.log_event("deposit", {"value": 50, "currency": "USD"})
    """

    name = "firebase"

    def __init__(
        self,
        settings: FirebaseSettings,
        http_session: aiohttp.ClientSession,
        *,
        trace: bool = False,
        url: str = FIREBASE_COLLECT_URL,
    ) -> None:
        if not settings.enabled:
            raise AttribConfigError("Firebase sink requires app_id, api_secret and app_instance_id")
        self._settings = settings
        self._url = url
        self._transport = JsonHttpTransport(self.name, http_session, trace=trace)

    def _body(self, name: str, params: Mapping[str, Any]) -> dict[str, Any]:
        return {
            "app_instance_id": self._settings.app_instance_id,
            "events": [{"name": name, "params": dict(params)}],
        }

    async def _send(self, name: str, params: Mapping[str, Any]) -> None:
        await self._transport.post(
            self._url,
            params={
                "firebase_app_id": self._settings.app_id,
                "api_secret": self._settings.api_secret,
            },
            json_body=self._body(name, params),
        )

    async def log_event(self, name: str, params: Mapping[str, Any]) -> None:
        await self._send(name, params)

    async def log_screen_view(self, screen_name: str, screen_class: str) -> None:
        await self._send("screen_view", {"screen_name": screen_name, "screen_class": screen_class})
