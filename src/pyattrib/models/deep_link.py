"""Deep-link callback payloads."""

from __future__ import annotations

from typing import Annotated

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from pyattrib.models._base import AttribBaseModel, AttribEnum, SdkStr, lenient_enum


class DeepLinkStatus(AttribEnum):
    UNKNOWN = "UNKNOWN"
    FOUND = "FOUND"
    NOT_FOUND = "NOT_FOUND"
    ERROR = "ERROR"


class DeepLinkData(AttribBaseModel):
    """The ``data`` section of a deep-link callback."""

    deep_link_value: SdkStr = None
    media_source: SdkStr = None
    campaign: SdkStr = None


class DeepLinkPayload(AttribBaseModel):
    """Deep-link callback: ``{deepLinkStatus, isDeferred, data: {...}}``.

    ``is_deferred`` is taken verbatim from the SDK.  Some SDK versions are
    known to mis-report it on slow networks; nothing here second-guesses it.
    """

    model_config = ConfigDict(alias_generator=to_camel)

    deep_link_status: Annotated[DeepLinkStatus, lenient_enum(DeepLinkStatus)] = DeepLinkStatus.UNKNOWN
    is_deferred: bool = False
    data: DeepLinkData | None = Field(default=None)

    @property
    def found(self) -> bool:
        return self.deep_link_status == DeepLinkStatus.FOUND
