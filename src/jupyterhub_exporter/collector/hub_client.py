"""
Thin HTTP client for the JupyterHub REST API.

One GET per call, no retries. The status code isn't checked: whatever
body comes back goes to the decoder, which rejects anything that isn't
a user list.
"""

from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional

import httpx

from jupyterhub_exporter.errors import HubAPIError

log = logging.getLogger(__name__)


def auth_headers(token: str) -> Dict[str, str]:
    """Hub API auth header, empty when no token is configured."""
    if not token:
        return {}
    return {"Authorization": f"token {token}"}


class HubClient:

    def __init__(self, timeout_seconds: Optional[float] = None):
        self._timeout = timeout_seconds
        self._client = httpx.Client(timeout=self._timeout)

    def fetch(self, url: str, headers: Optional[Mapping[str, str]] = None) -> bytes:
        """GET `url` and return the raw body. Raises HubAPIError if nothing came back."""
        try:
            response = self._client.get(url, headers=dict(headers or {}))
        except httpx.InvalidURL as exc:
            raise HubAPIError(f"bad hub URL {url!r}: {exc}") from exc
        except UnicodeEncodeError as exc:
            # header values must be ASCII, e.g. a token pasted with an accent in it
            raise HubAPIError(f"could not build request to {url}: {exc}") from exc
        except httpx.HTTPError as exc:
            raise HubAPIError(f"request to {url} failed: {exc}") from exc

        if not response.is_success:
            log.warning("hub returned HTTP %d for %s", response.status_code, url)
        return response.content

    def close(self):
        self._client.close()
