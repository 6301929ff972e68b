"""Minimal HTTP transport shared by the bundled sinks."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import aiohttp

from pyattrib._constants import USER_AGENT
from pyattrib._redact import redact_for_log
from pyattrib.exceptions import SinkTransportError

_logger = logging.getLogger(__name__)


class JsonHttpTransport:
    """POSTs JSON or form bodies and maps failures to :class:`SinkTransportError`."""

    def __init__(
        self,
        sink: str,
        http_session: aiohttp.ClientSession,
        *,
        trace: bool = False,
    ) -> None:
        self._sink = sink
        self._http = http_session
        self._trace = trace

    async def post(
        self,
        url: str,
        *,
        json_body: Mapping[str, Any] | None = None,
        form: Mapping[str, str] | None = None,
        params: Mapping[str, str] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> str:
        """Send a POST and return the response text.

        Exactly one of *json_body* / *form* is expected.  Any non-2xx status
        or client error raises :class:`SinkTransportError`.
        """
        request_headers: dict[str, str] = {"user-agent": USER_AGENT}
        if headers:
            request_headers.update(headers)

        if self._trace:
            _logger.debug(
                "[%s] POST %s params=%s body=%s",
                self._sink,
                url,
                redact_for_log(dict(params or {})),
                redact_for_log(dict(json_body if json_body is not None else form or {})),
            )

        kwargs: dict[str, Any] = {"headers": request_headers}
        if params:
            kwargs["params"] = dict(params)
        if json_body is not None:
            kwargs["json"] = dict(json_body)
        elif form is not None:
            kwargs["data"] = dict(form)

        try:
            async with self._http.post(url, **kwargs) as resp:
                text = await resp.text()
                if not 200 <= resp.status < 300:
                    raise SinkTransportError(
                        f"HTTP {resp.status} from {self._sink}: {text[:200]}",
                        sink=self._sink,
                        status_code=resp.status,
                        endpoint=url,
                    )
        except SinkTransportError:
            raise
        except aiohttp.ClientError as exc:
            raise SinkTransportError(
                f"Request to {self._sink} failed: {exc}",
                sink=self._sink,
                endpoint=url,
            ) from exc
        return text
