"""Install-conversion callback payloads."""

from __future__ import annotations

from typing import Annotated

from pyattrib.models._base import AttribBaseModel, AttribEnum, SdkStr, lenient_enum


class ConversionStatus(AttribEnum):
    """Install attribution status reported in ``af_status``."""

    UNKNOWN = "Unknown"
    ORGANIC = "Organic"
    NON_ORGANIC = "Non-organic"


class ConversionData(AttribBaseModel):
    """The ``data`` section of a conversion callback."""

    af_status: Annotated[ConversionStatus, lenient_enum(ConversionStatus)] = ConversionStatus.UNKNOWN
    media_source: SdkStr = None
    campaign: SdkStr = None


class ConversionPayload(AttribBaseModel):
    """Conversion-data callback: ``{data: {af_status, media_source, campaign}}``."""

    data: ConversionData | None = None
