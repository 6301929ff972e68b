from __future__ import annotations

import pytest

from pyattrib import events
from pyattrib.events import EventName


def test_deposit_upper_cases_currency() -> None:
    event = events.deposit(50, "usd")
    assert event.name == EventName.DEPOSIT
    assert event.params == {"value": 50, "currency": "USD"}


def test_deposit_keeps_float_value() -> None:
    event = events.deposit(12.5, " eUr ")
    assert event.params["value"] == 12.5
    assert event.params["currency"] == "EUR"


@pytest.mark.parametrize("value", ["50", None, True])
def test_deposit_rejects_non_numeric_value(value: object) -> None:
    with pytest.raises(ValueError):
        events.deposit(value, "usd")  # type: ignore[arg-type]


def test_deposit_rejects_empty_currency() -> None:
    with pytest.raises(ValueError):
        events.deposit(10, "  ")


def test_create_instance_and_screen_view_params() -> None:
    assert events.create_instance("vps-small").params == {"product_id": "vps-small"}
    assert events.screen_view("Deposit").params == {"screen_name": "Deposit"}


def test_identity_free_events_have_no_params() -> None:
    assert events.app_install().params == {}
    assert events.user_sign_up().name == "user_sign_up"


def test_deep_link_defaults() -> None:
    event = events.deep_link_opened()
    assert event.params == {"deep_link_value": "unknown", "media_source": "direct"}
    assert "campaign" not in event.params


def test_deferred_deep_link_carries_campaign() -> None:
    event = events.deferred_deep_link("promo", "facebook_ads", "spring")
    assert event.name == EventName.DEFERRED_DEEP_LINK
    assert event.params == {
        "deep_link_value": "promo",
        "media_source": "facebook_ads",
        "campaign": "spring",
    }
