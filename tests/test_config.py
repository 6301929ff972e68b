from __future__ import annotations

import logging

import pytest

from pyattrib.config import FirebaseSettings, MetaSettings, TrackingConfig

_ENV_KEYS = (
    "FIREBASE_APP_ID",
    "FIREBASE_API_SECRET",
    "FIREBASE_APP_INSTANCE_ID",
    "META_APP_ID",
    "META_CLIENT_TOKEN",
    "META_ANON_ID",
    "META_GRAPH_VERSION",
    "APPSFLYER_DEV_KEY",
    "APPSFLYER_APP_ID",
    "APPSFLYER_ID",
    "ATTRIB_ADVERTISER_TRACKING_ENABLED",
    "ATTRIB_DEBUG_TRACE",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults_enable_nothing() -> None:
    config = TrackingConfig.from_env()
    assert not config.firebase.enabled
    assert not config.meta.enabled
    assert not config.appsflyer.enabled
    assert config.advertiser_tracking_enabled is False


def test_reads_backend_credentials_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FIREBASE_APP_ID", "1:123:android:abc")
    monkeypatch.setenv("FIREBASE_API_SECRET", "secret")
    monkeypatch.setenv("FIREBASE_APP_INSTANCE_ID", "instance")
    monkeypatch.setenv("META_APP_ID", "4242")
    monkeypatch.setenv("META_CLIENT_TOKEN", "token")
    monkeypatch.setenv("ATTRIB_ADVERTISER_TRACKING_ENABLED", "yes")

    config = TrackingConfig.from_env()

    assert config.firebase.enabled
    assert config.meta.enabled
    assert config.meta.graph_version == "v19.0"
    assert not config.appsflyer.enabled
    assert config.advertiser_tracking_enabled is True


def test_overrides_win_over_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("META_APP_ID", "from-env")
    monkeypatch.setenv("META_CLIENT_TOKEN", "token")
    monkeypatch.setenv("ATTRIB_DEBUG_TRACE", "1")

    config = TrackingConfig.from_env(
        meta={"app_id": "override"},
        firebase=FirebaseSettings(app_id="a", api_secret="b", app_instance_id="c"),
        debug_trace=False,
    )

    assert config.meta == MetaSettings(app_id="override", client_token="token")
    assert config.firebase.enabled
    assert config.debug_trace is False


def test_unrecognised_bool_falls_back_to_default(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    monkeypatch.setenv("ATTRIB_ADVERTISER_TRACKING_ENABLED", "sometimes")
    monkeypatch.setenv("ATTRIB_DEBUG_TRACE", " OFF ")

    with caplog.at_level(logging.WARNING, logger="pyattrib.config"):
        config = TrackingConfig.from_env()

    assert config.advertiser_tracking_enabled is False
    assert config.debug_trace is False
    assert [r.getMessage() for r in caplog.records] == [
        "Ignoring unrecognised ATTRIB_ADVERTISER_TRACKING_ENABLED='sometimes'; using False"
    ]
