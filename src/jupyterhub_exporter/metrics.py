"""
Data model for the hub's /users response.

A scrape decodes the response into UserRecords, keeps the ones with a
running server, and turns their last_activity into nanoseconds since
the epoch. Nothing here outlives a single scrape.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

from jupyterhub_exporter.errors import HubDecodeError

# Matches what JupyterHub emits, e.g. 2024-03-01T09:15:42.123456Z
DATE_LAYOUT = "%Y-%m-%dT%H:%M:%S.%fZ"

# strptime's %f takes 1-6 digits, the hub always sends exactly 6
_TIMESTAMP_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{6}Z$", re.ASCII)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# user name -> last activity in nanoseconds since the epoch
ActiveUserSet = Dict[str, int]


@dataclass
class UserRecord:
    """One entry of the hub's user list. Only the fields we read."""

    name: str
    server: str = ""
    last_activity: str = ""

    @property
    def active(self) -> bool:
        return self.server != ""


def parse_last_activity(value: Optional[str]) -> int:
    """Nanoseconds since the epoch, or 0 when the value can't be parsed."""
    if not isinstance(value, str) or not _TIMESTAMP_RE.match(value):
        return 0
    try:
        parsed = datetime.strptime(value, DATE_LAYOUT).replace(tzinfo=timezone.utc)
    except ValueError:
        return 0

    delta = parsed - _EPOCH
    # integer math, a float timestamp loses the last digits
    return (delta.days * 86400 + delta.seconds) * 10**9 + delta.microseconds * 1000


def _optional_str(item: dict, key: str) -> str:
    value = item.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise HubDecodeError(f"field {key!r} should be a string, got {type(value).__name__}")
    return value


def decode_users(body: bytes) -> List[UserRecord]:
    """Decode a /users response body. Raises HubDecodeError on anything unexpected."""
    try:
        payload = json.loads(body)
    except (ValueError, UnicodeDecodeError, RecursionError) as exc:
        raise HubDecodeError(f"response is not valid JSON: {exc}") from exc

    if not isinstance(payload, list):
        raise HubDecodeError(f"expected a JSON array, got {type(payload).__name__}")

    records = []
    for item in payload:
        # a null entry is an empty record, it has no server so it's never active
        if item is None:
            continue
        if not isinstance(item, dict):
            raise HubDecodeError(f"expected a user object, got {type(item).__name__}")
        records.append(
            UserRecord(
                name=_optional_str(item, "name"),
                server=_optional_str(item, "server"),
                last_activity=_optional_str(item, "last_activity"),
            )
        )
    return records


def active_users(records: Iterable[UserRecord]) -> ActiveUserSet:
    """Map each user with a running server to its last activity.

    An unparsable timestamp still counts the user as active, with 0 as the value.
    """
    result: ActiveUserSet = {}
    for record in records:
        if record.active:
            result[record.name] = parse_last_activity(record.last_activity)
    return result
