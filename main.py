"""
Event Scheduler - Entry Point.

`python main.py` loads the catalog from the configured store and logs a
startup summary: how many events exist, what comes next and which events
are due for a reminder.
"""

import logging
from datetime import datetime

from event_scheduler.config import settings

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

from event_scheduler.adapters.store_factory import create_store
from event_scheduler.core.catalog import EventCatalog
from event_scheduler.core.reminders import events_needing_reminder, next_event

logger = logging.getLogger("event_scheduler")


def main() -> None:
    catalog = EventCatalog(create_store())
    events = catalog.list()
    now = datetime.now()

    logger.info("%d events in catalog (next id %d)", len(events), catalog.next_event_id)

    upcoming = next_event(events, now)
    if upcoming is None:
        logger.info("No upcoming events scheduled")
    else:
        logger.info("Next event: #%d '%s' at %s", upcoming.id, upcoming.title, upcoming.start)

    for event in events_needing_reminder(events, now, settings.REMINDER_MINUTES):
        logger.info("Reminder: '%s' starts at %s", event.title, event.start)


if __name__ == "__main__":
    main()
