from __future__ import annotations

"""Lightweight HTTP client util with retry.

Uses stdlib urllib; focus is GET JSON with limited retries and exponential
backoff.
"""
import http.client
import json
import logging
import time
import urllib.request
import urllib.error
from typing import Any, Optional

logger = logging.getLogger("pos_pricing.http")


class HttpError(Exception):
    pass


def get_json(
    url: str, *, timeout: float = 5.0, retries: int = 2, backoff: float = 0.5
) -> Any:
    last_err: Optional[Exception] = None
    request = urllib.request.Request(url, headers={"Accept": "application/json"})
    for attempt in range(retries + 1):
        try:
            with urllib.request.urlopen(request, timeout=timeout) as resp:  # nosec B310
                if resp.status >= 400:
                    raise HttpError(f"HTTP {resp.status} for {url}")
                data = resp.read()
                return json.loads(data.decode("utf-8"))
        except (
            urllib.error.URLError,
            http.client.HTTPException,
            OSError,
            HttpError,
            ValueError,
        ) as e:  # ValueError for JSON decode, OSError for dropped sockets
            last_err = e
            logger.debug("GET %s failed (attempt %d): %s", url, attempt + 1, e)
            if attempt == retries:
                break
            time.sleep(backoff * (2**attempt))
    raise HttpError(f"Failed to fetch JSON from {url}: {last_err}")
