"""Backup file helpers shared by every store.

A backup is a single text file with an events section and a recurring
events section (see event_scheduler.data.records). Failures are logged and
reported as False / None so stores can hand them straight to the catalog.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from event_scheduler.data.models import Event, ParseError, RecurrenceSpec
from event_scheduler.data.records import format_backup, parse_backup

logger = logging.getLogger(__name__)


def write_backup_file(
    path: str, events: Sequence[Event], specs: Sequence[RecurrenceSpec],
) -> bool:
    """Write events and specs to a backup file, overwriting it."""
    try:
        Path(path).write_text(format_backup(events, specs), encoding="utf-8")
    except OSError as exc:
        logger.error("Error creating backup %s: %s", path, exc)
        return False
    logger.info("Backup written to %s (%d events, %d recurrences)", path, len(events), len(specs))
    return True


def read_backup_file(path: str) -> tuple[list[Event], list[RecurrenceSpec]] | None:
    """Parse a backup file completely. Returns None if it is missing or malformed."""
    backup = Path(path)
    if not backup.exists():
        logger.error("Backup file does not exist: %s", path)
        return None

    try:
        return parse_backup(backup.read_text(encoding="utf-8"))
    except OSError as exc:
        logger.error("Error reading backup %s: %s", path, exc)
    except ParseError as exc:
        logger.error("Malformed backup %s: %s", path, exc)
    return None


def merge_backup(
    current_events: list[Event],
    current_specs: list[RecurrenceSpec],
    backup_events: list[Event],
    backup_specs: list[RecurrenceSpec],
    append: bool,
) -> tuple[list[Event], list[RecurrenceSpec]]:
    """Combine stored rows with backup rows.

    append=False replaces everything; append=True concatenates with no
    de-duplication, so ids already in the store may appear twice.
    """
    if not append:
        return list(backup_events), list(backup_specs)

    existing_ids = {e.id for e in current_events}
    colliding = sorted({e.id for e in backup_events if e.id in existing_ids})
    if colliding:
        logger.warning("Appended backup repeats existing event ids: %s", colliding)
    return current_events + backup_events, current_specs + backup_specs
