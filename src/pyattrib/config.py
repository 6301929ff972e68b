"""Tracker configuration for pyattrib."""

from __future__ import annotations

import dataclasses
import logging
import os
from collections.abc import Mapping
from typing import Any

from pyattrib._constants import META_GRAPH_VERSION

_logger = logging.getLogger(__name__)

_TRUE_VALUES = frozenset({"1", "true", "yes", "y", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "n", "off"})


def _env_bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    """Read switch *name* from *env*; unset or unrecognised values give *default*."""
    value = env.get(name)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    _logger.warning("Ignoring unrecognised %s=%r; using %s", name, value, default)
    return default


@dataclasses.dataclass(frozen=True)
class FirebaseSettings:
    """Credentials for the Firebase (GA4 Measurement Protocol) sink."""

    app_id: str = ""
    api_secret: str = ""
    app_instance_id: str = ""

    @property
    def enabled(self) -> bool:
        return bool(self.app_id and self.api_secret and self.app_instance_id)


@dataclasses.dataclass(frozen=True)
class MetaSettings:
    """Credentials for the Meta app-events sink."""

    app_id: str = ""
    client_token: str = ""
    anon_id: str = ""
    graph_version: str = META_GRAPH_VERSION

    @property
    def enabled(self) -> bool:
        return bool(self.app_id and self.client_token)


@dataclasses.dataclass(frozen=True)
class AppsFlyerSettings:
    """Credentials for the AppsFlyer server-to-server events sink."""

    dev_key: str = ""
    app_id: str = ""
    appsflyer_id: str = ""

    @property
    def enabled(self) -> bool:
        return bool(self.dev_key and self.app_id and self.appsflyer_id)


@dataclasses.dataclass(frozen=True)
class TrackingConfig:
    """Tracker configuration.

    Parameters
    ----------
    firebase : FirebaseSettings
        Firebase sink credentials. The sink is skipped when incomplete.
    meta : MetaSettings
        Meta sink credentials. The sink is skipped when incomplete.
    appsflyer : AppsFlyerSettings
        AppsFlyer sink credentials. The sink is skipped when incomplete.
    advertiser_tracking_enabled : bool
        Whether the user granted advertiser tracking (iOS ATT consent).
        Forwarded to the Meta sink.
    debug_trace : bool
        Log redacted outbound payloads at DEBUG level.
    """

    firebase: FirebaseSettings = dataclasses.field(default_factory=FirebaseSettings)
    meta: MetaSettings = dataclasses.field(default_factory=MetaSettings)
    appsflyer: AppsFlyerSettings = dataclasses.field(default_factory=AppsFlyerSettings)
    advertiser_tracking_enabled: bool = False
    debug_trace: bool = False

    @classmethod
    def from_env(cls, **overrides: Any) -> TrackingConfig:
        """Create configuration from environment variables.

        Reads ``FIREBASE_*``, ``META_*`` and ``APPSFLYER_*`` credentials
        plus the ``ATTRIB_*`` switches. Explicit keyword arguments override
        environment values; backend overrides may be given as a settings
        instance or as a dict of field values.

        Returns
        -------
        TrackingConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_BACKEND_MAP: dict[str, tuple[type[Any], dict[str, str]]] = {
            "firebase": (
                FirebaseSettings,
                {
                    "FIREBASE_APP_ID": "app_id",
                    "FIREBASE_API_SECRET": "api_secret",
                    "FIREBASE_APP_INSTANCE_ID": "app_instance_id",
                },
            ),
            "meta": (
                MetaSettings,
                {
                    "META_APP_ID": "app_id",
                    "META_CLIENT_TOKEN": "client_token",
                    "META_ANON_ID": "anon_id",
                    "META_GRAPH_VERSION": "graph_version",
                },
            ),
            "appsflyer": (
                AppsFlyerSettings,
                {
                    "APPSFLYER_DEV_KEY": "dev_key",
                    "APPSFLYER_APP_ID": "app_id",
                    "APPSFLYER_ID": "appsflyer_id",
                },
            ),
        }

        config_kwargs: dict[str, Any] = {}
        for backend, (settings_cls, env_map) in _ENV_BACKEND_MAP.items():
            backend_override = overrides.pop(backend, None)
            if isinstance(backend_override, settings_cls):
                config_kwargs[backend] = backend_override
                continue

            backend_kwargs: dict[str, str] = {}
            for env_key, field_name in env_map.items():
                val = env.get(env_key)
                if val is not None:
                    backend_kwargs[field_name] = val.strip()
            if isinstance(backend_override, dict):
                backend_kwargs.update(backend_override)
            config_kwargs[backend] = settings_cls(**backend_kwargs)

        if "advertiser_tracking_enabled" not in overrides:
            config_kwargs["advertiser_tracking_enabled"] = _env_bool(
                env,
                "ATTRIB_ADVERTISER_TRACKING_ENABLED",
                False,
            )

        if "debug_trace" not in overrides:
            config_kwargs["debug_trace"] = _env_bool(env, "ATTRIB_DEBUG_TRACE", False)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
