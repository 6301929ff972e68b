"""AppsFlyer server-to-server in-app events sink."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

import aiohttp

from pyattrib._constants import APPSFLYER_EVENTS_URL, HASHED_EMAIL_KEY
from pyattrib.config import AppsFlyerSettings
from pyattrib.exceptions import AttribConfigError
from pyattrib.sinks._http import JsonHttpTransport


class AppsFlyerSink:
    """Reports in-app events to the attribution platform.

    The hashed e-mail, when present, doubles as ``customer_user_id`` so
    events can be joined to the install on the AppsFlyer side.
    """

    name = "appsflyer"

    def __init__(
        self,
        settings: AppsFlyerSettings,
        http_session: aiohttp.ClientSession,
        *,
        trace: bool = False,
        base_url: str = APPSFLYER_EVENTS_URL,
    ) -> None:
        if not settings.enabled:
            raise AttribConfigError("AppsFlyer sink requires dev_key, app_id and appsflyer_id")
        self._settings = settings
        self._url = f"{base_url}/{settings.app_id}"
        self._transport = JsonHttpTransport(self.name, http_session, trace=trace)

    def _body(self, name: str, params: Mapping[str, Any]) -> dict[str, Any]:
        body: dict[str, Any] = {
            "appsflyer_id": self._settings.appsflyer_id,
            "eventName": name,
            "eventValue": json.dumps(dict(params), separators=(",", ":")),
        }
        customer_user_id = params.get(HASHED_EMAIL_KEY)
        if customer_user_id:
            body["customer_user_id"] = customer_user_id
        return body

    async def log_event(self, name: str, params: Mapping[str, Any]) -> None:
        await self._transport.post(
            self._url,
            json_body=self._body(name, params),
            headers={"authentication": self._settings.dev_key},
        )
