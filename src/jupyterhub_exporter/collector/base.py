"""
Base collector interface.

A collector is anything prometheus_client can register: it describes
its metric families up front and yields fresh ones on every scrape.
The HTTP server and the CLI only talk to this interface.
"""

from abc import ABC, abstractmethod
from typing import Iterator

from prometheus_client.metrics_core import Metric


class HubCollector(ABC):
    """Interface for all hub metric sources."""

    @abstractmethod
    def describe(self) -> Iterator[Metric]:
        """Metric families this collector emits, without samples."""
        ...

    @abstractmethod
    def collect(self) -> Iterator[Metric]:
        """Fetch current state and yield populated metric families."""
        ...

    @abstractmethod
    def name(self) -> str:
        """Human-readable name for this source."""
        ...
