"""Typed models for attribution callbacks and dispatch outcomes."""

from pyattrib.models.conversion import ConversionData, ConversionPayload, ConversionStatus
from pyattrib.models.deep_link import DeepLinkData, DeepLinkPayload, DeepLinkStatus
from pyattrib.models.outcome import DispatchResult, SinkOutcome

__all__ = [
    "ConversionData",
    "ConversionPayload",
    "ConversionStatus",
    "DeepLinkData",
    "DeepLinkPayload",
    "DeepLinkStatus",
    "DispatchResult",
    "SinkOutcome",
]
