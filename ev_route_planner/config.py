"""Central configuration for the EV route planner.

All values are constants imported by the rest of the package. Adjust as needed
for your environment. Every setting can be overridden through environment
variables (optionally via a local `.env`).
"""

from __future__ import annotations

import importlib
import os


def _env_float(key: str, default: float) -> float:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _env_int(key: str, default: int) -> int:
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key)
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "on"}:
        return True
    if normalized in {"0", "false", "no", "off"}:
        return False
    return default


# Load .env variables when python-dotenv is available.
_load_dotenv = None
try:
    _dotenv_mod = importlib.import_module("dotenv")
    _load_dotenv = getattr(_dotenv_mod, "load_dotenv", None)
except ImportError:
    _load_dotenv = None

if callable(_load_dotenv):
    # Load .env from the current directory or any parent folder.
    _load_dotenv()


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()


# ---------------------------------------------------------------------------
# External services
# ---------------------------------------------------------------------------
# Nominatim search endpoint used to turn place names into coordinates.
GEOCODER_URL = os.getenv(
    "GEOCODER_URL", "https://nominatim.openstreetmap.org/search"
)

# OSRM route endpoint (profile included). Coordinates are appended as
# ``{lon},{lat};{lon},{lat}``.
ROUTER_URL = os.getenv(
    "ROUTER_URL", "https://router.project-osrm.org/route/v1/driving"
)

# Overpass interpreter used for charging station lookups.
OVERPASS_URL = os.getenv("OVERPASS_URL", "https://overpass-api.de/api/interpreter")

# Nominatim and Overpass both reject anonymous clients.
USER_AGENT = os.getenv("USER_AGENT", "ev-route-planner/1.0")

# ISO country code used to scope geocoding. Empty string searches worldwide.
DEFAULT_COUNTRY_CODE = os.getenv("DEFAULT_COUNTRY_CODE", "in")


# ---------------------------------------------------------------------------
# HTTP behaviour
# ---------------------------------------------------------------------------
# Request timeouts in seconds. Every external call uses one of these.
GEOCODE_TIMEOUT = _env_float("GEOCODE_TIMEOUT", 10.0)
ROUTE_TIMEOUT = _env_float("ROUTE_TIMEOUT", 15.0)
POI_TIMEOUT = _env_float("POI_TIMEOUT", 30.0)

# HTTP session pool sizes for concurrent requests.
HTTP_POOL_CONNECTIONS = _env_int("HTTP_POOL_CONNECTIONS", 10)
HTTP_POOL_MAXSIZE = _env_int("HTTP_POOL_MAXSIZE", 10)

# Retries applied by the session adapter on 5xx responses.
HTTP_MAX_RETRIES = _env_int("HTTP_MAX_RETRIES", 2)
HTTP_BACKOFF_FACTOR = _env_float("HTTP_BACKOFF_FACTOR", 0.5)

# Overpass queries are sent as POST; retry them on 5xx as well.
HTTP_RETRY_POST = _env_bool("HTTP_RETRY_POST", True)

# Geocoding results cache. Set the size to 0 to disable caching.
GEOCODE_CACHE_SIZE = _env_int("GEOCODE_CACHE_SIZE", 256)
GEOCODE_CACHE_TTL_SECONDS = _env_int("GEOCODE_CACHE_TTL_SECONDS", 24 * 3600)


# ---------------------------------------------------------------------------
# Coverage analysis defaults
# ---------------------------------------------------------------------------
# Assumed safe operating range of the vehicle (km).
SAFE_RANGE_KM = _env_float("SAFE_RANGE_KM", 180.0)

# Reserve kept back from the safe range. Gaps longer than
# SAFE_RANGE_KM - BUFFER_KM raise a warning.
BUFFER_KM = _env_float("BUFFER_KM", 40.0)

# Maximum distance (km) between a station and the route for it to count as
# reachable without a meaningful detour.
MATCH_TOLERANCE_KM = _env_float("MATCH_TOLERANCE_KM", 15.0)

# Gaps longer than this (km) are reported as critical instead of advisory.
CRITICAL_GAP_KM = _env_float("CRITICAL_GAP_KM", 200.0)

# Margin (degrees) added around the route before querying for stations.
BOUNDING_BOX_PADDING_DEG = _env_float("BOUNDING_BOX_PADDING_DEG", 0.1)

# Range regained per minute of charging (km/min), used for suggested stops.
CHARGING_RATE_KM_PER_MIN = _env_float("CHARGING_RATE_KM_PER_MIN", 2.0)

# Upper bound on route samples compared against each candidate station.
MAX_ROUTE_SAMPLES = _env_int("MAX_ROUTE_SAMPLES", 500)


# ---------------------------------------------------------------------------
# Points-of-interest query strategy
# ---------------------------------------------------------------------------
# "bbox" issues one bounding-box query; "checkpoints" issues radius queries
# around evenly spaced route samples.
POI_QUERY_STRATEGY = os.getenv("POI_QUERY_STRATEGY", "bbox").strip().lower()

# Checkpoint strategy tuning.
POI_CHECKPOINT_COUNT = _env_int("POI_CHECKPOINT_COUNT", 10)
POI_CHECKPOINT_RADIUS_KM = _env_float("POI_CHECKPOINT_RADIUS_KM", 15.0)


# ---------------------------------------------------------------------------
# HTTP API
# ---------------------------------------------------------------------------
API_HOST = os.getenv("API_HOST", "localhost")
API_PORT = _env_int("API_PORT", 5000)

# Value sent as Access-Control-Allow-Origin. Empty string disables the header.
CORS_ALLOW_ORIGIN = os.getenv("CORS_ALLOW_ORIGIN", "*")
