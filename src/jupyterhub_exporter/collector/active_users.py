"""
Collector that reports each active hub user's last activity.

Every scrape calls {host}/users once and rebuilds the metrics from
scratch. A failed request or an unreadable body never fails the
scrape: it shows up as zero active users plus jupyterhub_scrape_error 1.
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional

from prometheus_client.core import GaugeMetricFamily, UnknownMetricFamily
from prometheus_client.metrics_core import Metric

from jupyterhub_exporter.collector.base import HubCollector
from jupyterhub_exporter.collector.hub_client import HubClient, auth_headers
from jupyterhub_exporter.config import NAMESPACE, ExporterConfig
from jupyterhub_exporter.errors import ExporterError
from jupyterhub_exporter.metrics import ActiveUserSet, active_users, decode_users

log = logging.getLogger(__name__)

ACTIVE_USER_METRIC = f"{NAMESPACE}_active_user"
SCRAPE_ERROR_METRIC = f"{NAMESPACE}_scrape_error"
USER_LABEL = "userName"


def _active_user_family() -> UnknownMetricFamily:
    return UnknownMetricFamily(ACTIVE_USER_METRIC, "Current active users.", labels=[USER_LABEL])


def _scrape_error_family(value: Optional[float] = None) -> GaugeMetricFamily:
    return GaugeMetricFamily(
        SCRAPE_ERROR_METRIC,
        "1 if the last request to the hub failed or returned an unreadable body.",
        value=value,
    )


class ActiveUserCollector(HubCollector):

    def __init__(self, config: ExporterConfig, client: Optional[HubClient] = None):
        self._config = config
        self._owns_client = client is None
        self._client = client or HubClient(timeout_seconds=config.timeout_seconds)

    def fetch_active_users(self) -> ActiveUserSet:
        """One round trip to the hub. Raises HubAPIError / HubDecodeError."""
        body = self._client.fetch(self._config.users_url, auth_headers(self._config.token))
        users = active_users(decode_users(body))
        log.debug("hub reports %d active user(s)", len(users))
        return users

    def describe(self) -> Iterator[Metric]:
        yield _active_user_family()
        yield _scrape_error_family()

    def collect(self) -> Iterator[Metric]:
        failed = False
        try:
            users = self.fetch_active_users()
        except ExporterError as exc:
            log.warning("scrape of %s failed: %s", self._config.users_url, exc)
            users = {}
            failed = True

        family = _active_user_family()
        for user_name, last_activity in users.items():
            family.add_metric([user_name], float(last_activity))
        yield family

        yield _scrape_error_family(1.0 if failed else 0.0)

    def name(self) -> str:
        return f"JupyterHub ({self._config.host})"

    def close(self):
        if self._owns_client:
            self._client.close()
