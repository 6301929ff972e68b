"""Backend sinks and the factory that builds them from configuration."""

from __future__ import annotations

import logging

import aiohttp

from pyattrib.config import TrackingConfig
from pyattrib.sinks.appsflyer import AppsFlyerSink
from pyattrib.sinks.base import BackendSink, ScreenViewSink
from pyattrib.sinks.firebase import FirebaseSink
from pyattrib.sinks.meta import MetaSink

_logger = logging.getLogger(__name__)


def build_sinks(config: TrackingConfig, http_session: aiohttp.ClientSession) -> list[BackendSink]:
    """Instantiate every sink whose credentials are present in *config*."""
    sinks: list[BackendSink] = []
    if config.firebase.enabled:
        sinks.append(FirebaseSink(config.firebase, http_session, trace=config.debug_trace))
    if config.meta.enabled:
        sinks.append(
            MetaSink(
                config.meta,
                http_session,
                advertiser_tracking_enabled=config.advertiser_tracking_enabled,
                trace=config.debug_trace,
            )
        )
    if config.appsflyer.enabled:
        sinks.append(AppsFlyerSink(config.appsflyer, http_session, trace=config.debug_trace))
    if not sinks:
        _logger.warning("No analytics sinks configured; events will be dropped")
    return sinks


__all__ = [
    "AppsFlyerSink",
    "BackendSink",
    "FirebaseSink",
    "MetaSink",
    "ScreenViewSink",
    "build_sinks",
]
