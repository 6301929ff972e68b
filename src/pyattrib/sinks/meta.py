"""Meta (Facebook) app-events sink."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

import aiohttp

from pyattrib._constants import META_GRAPH_URL
from pyattrib.config import MetaSettings
from pyattrib.exceptions import AttribConfigError
from pyattrib.sinks._http import JsonHttpTransport


class MetaSink:
    """Posts custom app events to the Graph API ``activities`` edge.

    ``advertiser_tracking_enabled`` mirrors the user's tracking consent and
    is sent with every event, as the mobile SDK does.
    """

    name = "meta"

    def __init__(
        self,
        settings: MetaSettings,
        http_session: aiohttp.ClientSession,
        *,
        advertiser_tracking_enabled: bool = False,
        trace: bool = False,
        base_url: str = META_GRAPH_URL,
    ) -> None:
        if not settings.enabled:
            raise AttribConfigError("Meta sink requires app_id and client_token")
        self._settings = settings
        self._advertiser_tracking_enabled = advertiser_tracking_enabled
        self._url = f"{base_url}/{settings.graph_version}/{settings.app_id}/activities"
        self._transport = JsonHttpTransport(self.name, http_session, trace=trace)

    def _form(self, name: str, params: Mapping[str, Any]) -> dict[str, str]:
        custom_event: dict[str, Any] = {"_eventName": name}
        custom_event.update(params)
        form = {
            "event": "CUSTOM_APP_EVENTS",
            "advertiser_tracking_enabled": "1" if self._advertiser_tracking_enabled else "0",
            "application_tracking_enabled": "1",
            "custom_events": json.dumps([custom_event], separators=(",", ":")),
            "access_token": f"{self._settings.app_id}|{self._settings.client_token}",
        }
        if self._settings.anon_id:
            form["anon_id"] = self._settings.anon_id
        return form

    async def log_event(self, name: str, params: Mapping[str, Any]) -> None:
        await self._transport.post(self._url, form=self._form(name, params))
