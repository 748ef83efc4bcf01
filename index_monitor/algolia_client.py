#!/usr/bin/env python3
"""Algolia REST client: record count and build logs for one index."""
import json
import logging
from typing import Any

import requests

from .errors import MalformedResponse, TransportFailure
from .settings import ALGOLIA_API_KEY, ALGOLIA_APP_ID, ALGOLIA_INDEX_NAME, ALGOLIA_REQUEST_TIMEOUT

logger = logging.getLogger(__name__)

COUNT_QUERY = {"params": "hitsPerPage=0&getRankingInfo=0&query=*"}
LOG_TYPE = "build"
LOG_OFFSET = 1
LOG_LENGTH = 1000


def require_credentials(app_id: str, api_key: str, index_name: str) -> None:
    """Raise a clear error if any of app id, API key or index name is missing."""
    missing = []
    if not app_id:
        missing.append("ALGOLIA_APP_ID")
    if not api_key:
        missing.append("ALGOLIA_API_KEY")
    if not index_name:
        missing.append("ALGOLIA_INDEX_NAME")
    if missing:
        raise RuntimeError(
            f"Missing required settings: {', '.join(missing)}. Pass them as arguments or set them in .env."
        )


class AlgoliaClient:
    def __init__(
        self,
        app_id: str,
        api_key: str,
        index_name: str,
        session: requests.Session | None = None,
        timeout: int | None = None,
    ):
        self.base_url = f"https://{app_id}-dsn.algolia.net/1/"
        self.index_name = index_name
        # requests rejects timeouts <= 0; treat them as unset
        self.timeout = timeout if timeout and timeout > 0 else None
        self.session = session or requests.Session()
        self.session.headers.update({
            "x-algolia-application-id": app_id,
            "x-algolia-api-key": api_key,
            "content-type": "application/json",
            "accept": "application/json",
        })

    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = self.base_url + path
        logger.debug("Algolia request: %s %s", method, url)
        try:
            r = self.session.request(method, url, timeout=self.timeout, **kwargs)
            logger.debug("Algolia response: url=%s status=%s", url, r.status_code)
            r.raise_for_status()
        except requests.RequestException as e:
            raise TransportFailure(f"Algolia {method} {path} failed: {e}") from e
        try:
            return r.json()
        except (ValueError, json.JSONDecodeError) as e:
            raise TransportFailure(f"Algolia {method} {path} returned invalid JSON: {e}") from e

    def count_records(self) -> int:
        """Total records in the index (match-all query, no hits returned). 0 if nbHits is missing."""
        body = self._request("POST", f"indexes/{self.index_name}/query", json=COUNT_QUERY)
        try:
            return _nb_hits(body)
        except MalformedResponse as e:
            logger.warning("%s; counting 0 records", e)
            return 0

    def fetch_logs(self, log_type: str = LOG_TYPE, offset: int = LOG_OFFSET, length: int = LOG_LENGTH) -> list:
        """Most recent log entries for the index, as decoded JSON objects. Empty if logs is missing."""
        params = {
            "indexName": self.index_name,
            "type": log_type,
            "offset": offset,
            "length": length,
        }
        body = self._request("GET", "logs", params=params)
        try:
            return _logs(body)
        except MalformedResponse as e:
            logger.warning("%s; treating as no logs", e)
            return []


def _nb_hits(body: Any) -> int:
    value = body.get("nbHits") if isinstance(body, dict) else None
    # bool is an int subclass; a negative count is as useless as a missing one
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise MalformedResponse(f"query response has no usable nbHits: {value!r}")
    return value


def _logs(body: Any) -> list:
    logs = body.get("logs") if isinstance(body, dict) else None
    if not isinstance(logs, list):
        raise MalformedResponse(f"logs response has no logs array: {type(logs).__name__}")
    return logs


def create_client(app_id: str = "", api_key: str = "", index_name: str = "") -> AlgoliaClient:
    """Return a client for the given credentials, falling back to ALGOLIA_* settings from the environment."""
    app_id = app_id or ALGOLIA_APP_ID
    api_key = api_key or ALGOLIA_API_KEY
    index_name = index_name or ALGOLIA_INDEX_NAME
    require_credentials(app_id, api_key, index_name)
    return AlgoliaClient(app_id, api_key, index_name, timeout=ALGOLIA_REQUEST_TIMEOUT)
