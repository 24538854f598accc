"""
Recent diagnostics summary for the AI context.

Reads stored X-ray, blood work and other lab analyses for a dog through a
DiagnosticsSource and condenses the recent ones into a short prompt section.
"""

import logging
from collections.abc import Mapping
from datetime import datetime, timedelta
from typing import Callable, Optional, Protocol

from pydantic import ValidationError

from .models import DiagnosticRecord
from .scoring import parse_timestamp

logger = logging.getLogger(__name__)

DIAGNOSTICS_WINDOW_DAYS = 30
XRAY_LIMIT = 3
BLOOD_WORK_LIMIT = 3
LAB_LIMIT = 2

SECTION_HEADER = f"Recent Diagnostics (last {DIAGNOSTICS_WINDOW_DAYS} days):"


class DiagnosticsSource(Protocol):
    """Read-only per-dog lookups of stored diagnostic analyses."""

    def get_xray_analyses(self, dog_id: str) -> list: ...

    def get_blood_work_analyses(self, dog_id: str) -> list: ...

    def get_lab_analyses(self, dog_id: str) -> list: ...


def _fetch(kind: str, lookup: Callable[[str], list], dog_id: str) -> list[DiagnosticRecord]:
    """Call a source lookup; a failing source yields no records."""
    try:
        raw = lookup(dog_id) or []
    except Exception:
        logger.exception(f"[DIAGNOSTICS] {kind} lookup failed for dog={dog_id}")
        return []

    records = []
    for item in raw:
        if isinstance(item, DiagnosticRecord):
            records.append(item)
        elif isinstance(item, Mapping):
            try:
                records.append(DiagnosticRecord.model_validate(dict(item)))
            except ValidationError as e:
                logger.warning(f"[DIAGNOSTICS] Skipping malformed {kind} record: {e}")
    return records


def recent_records(
    records: list[DiagnosticRecord],
    now: datetime,
    limit: int,
    window_days: int = DIAGNOSTICS_WINDOW_DAYS,
) -> list[tuple[datetime, DiagnosticRecord]]:
    """Records created within the window, newest first, truncated to `limit`."""
    cutoff = now - timedelta(days=window_days)
    dated = []
    for record in records:
        created = parse_timestamp(record.created_at)
        if created is None or created < cutoff:
            continue
        dated.append((created, record))
    dated.sort(key=lambda pair: pair[0], reverse=True)
    return dated[:limit]


def format_record(label: str, created: datetime, record: DiagnosticRecord, detail: Optional[str] = None) -> str:
    when = created.date().isoformat()
    heading = f"{label} ({when}, {detail})" if detail else f"{label} ({when})"

    body = [part for part in (record.overall_assessment, record.summary) if part]
    if not record.summary and record.key_findings:
        body.append("; ".join(record.key_findings[:2]))
    if not body:
        return f"- {heading}"
    return f"- {heading}: {' - '.join(body)}"


def summarize_recent_diagnostics(
    source: Optional[DiagnosticsSource],
    dog_id: Optional[str],
    now: datetime,
) -> str:
    """
    Build the recent-diagnostics section.

    Returns an empty string when there is no source, no dog id, or no
    analysis from the last 30 days.
    """
    if source is None or not dog_id:
        return ""

    lines = []
    for created, record in recent_records(
        _fetch("xray", source.get_xray_analyses, dog_id), now, XRAY_LIMIT
    ):
        lines.append(format_record("X-ray", created, record, record.body_region))

    for created, record in recent_records(
        _fetch("blood_work", source.get_blood_work_analyses, dog_id), now, BLOOD_WORK_LIMIT
    ):
        lines.append(format_record("Blood work", created, record))

    for created, record in recent_records(
        _fetch("lab", source.get_lab_analyses, dog_id), now, LAB_LIMIT
    ):
        lines.append(format_record(record.lab_type or "Lab", created, record))

    if not lines:
        return ""

    logger.debug(f"[DIAGNOSTICS] {len(lines)} recent analyses for dog={dog_id}")
    return "\n".join([SECTION_HEADER, *lines])
