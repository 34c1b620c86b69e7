"""Load and validate environment variables. Uses python-dotenv.

This module is intentionally thin and side-effect free except for loading `.env`.
Callers should use the accessor functions below rather than reading `os.environ`
directly, to keep environment handling consistent.
"""

from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
import os

from osmgest import __version__

OSM_MAIN_URL = "https://api.openstreetmap.org/api"
OSM_DEV_URL = "https://master.apis.dev.openstreetmap.org/api"
DEFAULT_API_VERSION = "0.6"
DEFAULT_TIMEOUT_SECONDS = 30.0


def _project_root() -> Path:
    """Resolve project root (the directory holding the osmgest package)."""
    return Path(__file__).resolve().parent.parent.parent


def load_config() -> None:
    """
    Load .env from project root. Idempotent; safe to call multiple times.
    Variables already present in the process environment are not overridden.
    """
    root = _project_root()
    env_path = root / ".env"
    load_dotenv(env_path, override=False)


def get_required(key: str) -> str:
    """
    Get required env var. Raises if missing or empty.

    Raises:
        ValueError: If key is missing or empty after trimming.
    """
    load_config()
    val = os.getenv(key, "").strip()
    if not val:
        raise ValueError(
            f"Missing required environment variable: {key}. "
            "Set it in .env or export it."
        )
    return val


def get_optional(key: str, default: str = "") -> str:
    """Get optional env var; return default if missing or empty."""
    load_config()
    val = os.getenv(key, "").strip()
    return val if val else default


def get_optional_int(key: str, default: int) -> int:
    """Get optional env var as int; return default if missing or invalid."""
    load_config()
    raw = os.getenv(key, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def get_optional_float(key: str, default: float) -> float:
    """Get optional env var as float; return default if missing or invalid."""
    load_config()
    raw = os.getenv(key, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


# --- Public config accessors ---

def osm_api_env() -> str:
    """Optional: which OSM server the default URL points at. `dev` (default) or `main`."""
    return get_optional("OSM_API_ENV", "dev").lower().strip()


def osm_api_url() -> str:
    """
    Base URL of the OSM API, without the version segment.
    OSM_API_URL wins; otherwise the URL of the server picked by OSM_API_ENV.
    """
    default = OSM_MAIN_URL if osm_api_env() == "main" else OSM_DEV_URL
    return get_optional("OSM_API_URL", default)


def osm_api_version() -> str:
    """Optional: API version segment. Default 0.6."""
    return get_optional("OSM_API_VERSION", DEFAULT_API_VERSION)


def osm_access_token() -> str | None:
    """Optional: OAuth 2.0 access token, needed by write and user endpoints."""
    val = get_optional("OSM_ACCESS_TOKEN", "")
    return val or None


def osm_user_agent() -> str:
    """Optional: User-Agent sent with every request."""
    return get_optional("OSM_USER_AGENT", f"osmgest/{__version__}")


def osm_http_timeout() -> float:
    """Optional: per-request timeout in seconds. Default 30."""
    return get_optional_float("OSM_HTTP_TIMEOUT", DEFAULT_TIMEOUT_SECONDS)


def project_root() -> Path:
    """Project root directory."""
    return _project_root()
