"""pyattrib - Async analytics event fan-out and install attribution."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyattrib")
except PackageNotFoundError:
    __version__ = "0+local"
from pyattrib.attribution import AttributionClassifier, InstallAttribution, classify_deep_link
from pyattrib.config import AppsFlyerSettings, FirebaseSettings, MetaSettings, TrackingConfig
from pyattrib.dispatcher import EventDispatcher
from pyattrib.events import Event, EventName
from pyattrib.exceptions import (
    AttribConfigError,
    AttribError,
    HashingError,
    SinkError,
    SinkTransportError,
)
from pyattrib.identity import Identity, hash_email
from pyattrib.models import (
    ConversionPayload,
    ConversionStatus,
    DeepLinkPayload,
    DeepLinkStatus,
    DispatchResult,
    SinkOutcome,
)
from pyattrib.sinks import AppsFlyerSink, BackendSink, FirebaseSink, MetaSink, build_sinks
from pyattrib.storage import FlagStore, InMemoryFlagStore
from pyattrib.tracker import AppTracker

__all__ = [
    "__version__",
    "AppTracker",
    "AppsFlyerSettings",
    "AppsFlyerSink",
    "AttribConfigError",
    "AttribError",
    "AttributionClassifier",
    "BackendSink",
    "ConversionPayload",
    "ConversionStatus",
    "DeepLinkPayload",
    "DeepLinkStatus",
    "DispatchResult",
    "Event",
    "EventDispatcher",
    "EventName",
    "FirebaseSettings",
    "FirebaseSink",
    "FlagStore",
    "HashingError",
    "Identity",
    "InMemoryFlagStore",
    "InstallAttribution",
    "MetaSettings",
    "MetaSink",
    "SinkError",
    "SinkOutcome",
    "SinkTransportError",
    "TrackingConfig",
    "build_sinks",
    "classify_deep_link",
    "hash_email",
]
