"""Timestamp and id helpers shared by the storage layer."""

import uuid
from datetime import datetime, timezone


def generate_id() -> str:
    return uuid.uuid4().hex[:20]


def get_utc_iso8601_timestamp() -> str:
    now = datetime.now(timezone.utc)
    return now.strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"
