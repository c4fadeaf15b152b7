"""
Exporter settings. Built once by the CLI and handed to the collector
and the HTTP server, so nothing reads globals at scrape time.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_HOST = "http://localhost:8888/hub/api"
DEFAULT_LISTEN_ADDRESS = "0.0.0.0"
DEFAULT_PORT = 9225

NAMESPACE = "jupyterhub"
METRICS_PATH = "/metrics"


@dataclass
class ExporterConfig:
    host: str = DEFAULT_HOST
    token: str = ""

    # Accepted on the command line but not used yet
    stop: bool = True
    hours: int = 24

    listen_address: str = DEFAULT_LISTEN_ADDRESS
    port: int = DEFAULT_PORT

    # None means wait forever, same as the hub client default
    timeout_seconds: Optional[float] = None

    @property
    def users_url(self) -> str:
        return self.host.rstrip("/") + "/users"
