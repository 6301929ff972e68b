"""Named analytics events and their parameter contracts.

The event names and parameter keys here are what the backends report on,
so they must stay stable across releases.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pyattrib._constants import DEFAULT_MEDIA_SOURCE, UNKNOWN_DEEP_LINK_VALUE

Scalar = str | int | float | bool


class EventName(StrEnum):
    APP_INSTALL = "app_install"
    USER_SIGN_UP = "user_sign_up"
    DEPOSIT = "deposit"
    CREATE_INSTANCE = "create_instance"
    SCREEN_VIEW = "screen_view"
    DEEP_LINK_OPENED = "deep_link_opened"
    DEFERRED_DEEP_LINK = "deferred_deep_link"


class Event(BaseModel):
    """A named event with flat scalar parameters."""

    model_config = ConfigDict(frozen=True)

    name: str
    params: dict[str, Scalar] = Field(default_factory=dict)

    @field_validator("name")
    @classmethod
    def _normalize_name(cls, value: str) -> str:
        name = value.strip()
        if not name:
            raise ValueError("event name must be non-empty")
        return name


def app_install() -> Event:
    return Event(name=EventName.APP_INSTALL)


def user_sign_up() -> Event:
    # hashed_email is merged in by the dispatcher from the bound identity.
    return Event(name=EventName.USER_SIGN_UP)


def deposit(value: float, currency: str) -> Event:
    """Build a ``deposit`` event.

    Parameters
    ----------
    value : int or float
        Deposited amount.
    currency : str
        ISO-4217 currency code in any case; always sent upper-cased.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"deposit value must be a number, got {value!r}")
    if not isinstance(currency, str) or not currency.strip():
        raise ValueError("deposit currency must be a non-empty ISO-4217 code")
    return Event(
        name=EventName.DEPOSIT,
        params={"value": value, "currency": currency.strip().upper()},
    )


def create_instance(product_id: str) -> Event:
    if not product_id:
        raise ValueError("product_id must be non-empty")
    return Event(name=EventName.CREATE_INSTANCE, params={"product_id": product_id})


def screen_view(screen_name: str) -> Event:
    if not screen_name:
        raise ValueError("screen_name must be non-empty")
    return Event(name=EventName.SCREEN_VIEW, params={"screen_name": screen_name})


def _deep_link_params(
    deep_link_value: str | None,
    media_source: str | None,
    campaign: str | None,
) -> dict[str, Any]:
    params: dict[str, Any] = {
        "deep_link_value": deep_link_value or UNKNOWN_DEEP_LINK_VALUE,
        "media_source": media_source or DEFAULT_MEDIA_SOURCE,
    }
    # A missing campaign is omitted, never defaulted.
    if campaign:
        params["campaign"] = campaign
    return params


def deep_link_opened(
    deep_link_value: str | None = None,
    media_source: str | None = None,
    campaign: str | None = None,
) -> Event:
    return Event(
        name=EventName.DEEP_LINK_OPENED,
        params=_deep_link_params(deep_link_value, media_source, campaign),
    )


def deferred_deep_link(
    deep_link_value: str | None = None,
    media_source: str | None = None,
    campaign: str | None = None,
) -> Event:
    return Event(
        name=EventName.DEFERRED_DEEP_LINK,
        params=_deep_link_params(deep_link_value, media_source, campaign),
    )
