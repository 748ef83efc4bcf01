"""Settings read from the environment (.env supported)."""
import os

from dotenv import load_dotenv

load_dotenv()


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


def _bool_env(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes")


ALGOLIA_APP_ID = (os.getenv("ALGOLIA_APP_ID") or "").strip()
ALGOLIA_API_KEY = (os.getenv("ALGOLIA_API_KEY") or "").strip()
ALGOLIA_INDEX_NAME = (os.getenv("ALGOLIA_INDEX_NAME") or "").strip()
# 0 leaves requests without a timeout
ALGOLIA_REQUEST_TIMEOUT = _int_env("ALGOLIA_REQUEST_TIMEOUT", 0)

MONITOR_DELAY = _int_env("MONITOR_DELAY", 30)
MONITOR_DELTA = _int_env("MONITOR_DELTA", -1000)
MONITOR_DEBUG = _bool_env("MONITOR_DEBUG")
