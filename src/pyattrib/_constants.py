"""Internal constants shared across the library."""

# ------------------------------------------------------------------
# Identity hashing
# ------------------------------------------------------------------

HASHED_EMAIL_LENGTH = 16
HASHED_EMAIL_KEY = "hashed_email"

# ------------------------------------------------------------------
# Attribution defaults
# ------------------------------------------------------------------

DEFAULT_MEDIA_SOURCE = "direct"
UNKNOWN_DEEP_LINK_VALUE = "unknown"

# ------------------------------------------------------------------
# Backend endpoints
# ------------------------------------------------------------------

FIREBASE_COLLECT_URL = "https://www.google-analytics.com/mp/collect"
META_GRAPH_URL = "https://graph.facebook.com"
META_GRAPH_VERSION = "v19.0"
APPSFLYER_EVENTS_URL = "https://api2.appsflyer.com/inappevent"

USER_AGENT = "pyattrib"
