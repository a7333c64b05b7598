"""Run identifier helpers."""

from __future__ import annotations

from datetime import datetime, timezone

RUN_ID_FORMAT = "run-%Y%m%dT%H%M%S%fZ"


def generate_run_id(now: datetime | None = None) -> str:
    """Sortable run id; a naive ``now`` is taken to be UTC."""
    moment = now or datetime.now(tz=timezone.utc)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).strftime(RUN_ID_FORMAT)
