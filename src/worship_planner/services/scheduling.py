"""Scheduling and notification utilities for recurring services.

Turns weekly service definitions into concrete occurrences and setlist
reminder notifications. Functions that depend on the current time accept a
`now` argument; when omitted, the local clock is used.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, Optional, Union

from worship_planner.models import RecurringService, SetlistNotification

logger = logging.getLogger(__name__)

DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]

SETLIST_REMINDER = "setlist-reminder"


@dataclass
class ReminderDates:
    """Reminder deadlines for one service occurrence."""

    setlist_reminder: datetime
    team_reminder: datetime


def _parse_time(time_str: str) -> tuple[int, int]:
    hours, minutes = (int(part) for part in time_str.split(":"))
    return hours, minutes


def _day_of_week(moment: Union[date, datetime]) -> int:
    # datetime.weekday() is Monday=0; services count from Sunday=0
    return (moment.weekday() + 1) % 7


def _display_date(moment: Union[date, datetime]) -> str:
    return f"{moment.month}/{moment.day}/{moment.year}"


def _as_date(value: Union[str, date, datetime]) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value[:10])


def get_next_service_date(
    service: RecurringService, from_date: Optional[datetime] = None
) -> datetime:
    """Get the next occurrence of a service strictly after a date.

    A reference date that already falls on the service's weekday yields the
    occurrence one week later.

    Args:
        service: The recurring service
        from_date: Reference moment (defaults to now)

    Returns:
        Occurrence date with the service's start time, seconds zeroed

    Raises:
        ValueError: If the service time is not "HH:MM"
    """
    if from_date is None:
        from_date = datetime.now()

    days_until = (service.day_of_week - _day_of_week(from_date)) % 7
    if days_until == 0:
        days_until = 7

    hours, minutes = _parse_time(service.time)
    next_date = from_date + timedelta(days=days_until)
    return next_date.replace(hour=hours, minute=minutes, second=0, microsecond=0)


def calculate_reminder_dates(service: RecurringService, service_date: datetime) -> ReminderDates:
    """Compute the setlist and team reminder deadlines for an occurrence.

    Args:
        service: The recurring service
        service_date: Occurrence date

    Returns:
        ReminderDates at the same time of day as the occurrence
    """
    return ReminderDates(
        setlist_reminder=service_date - timedelta(days=service.setlist_reminder_days),
        team_reminder=service_date - timedelta(days=service.team_reminder_days),
    )


def _has_setlist_reminder(
    notifications: Iterable[SetlistNotification], service_id: str, occurrence: date
) -> bool:
    return any(
        n.service_id == service_id
        and n.type == SETLIST_REMINDER
        and _as_date(n.target_date) == occurrence
        for n in notifications
    )


def generate_upcoming_notifications(
    services: Iterable[RecurringService],
    existing_notifications: Iterable[SetlistNotification],
    weeks_ahead: int = 4,
    now: Optional[datetime] = None,
    assigned_to: str = "",
) -> list[SetlistNotification]:
    """Create setlist reminders for the coming weeks.

    For each active service, one occurrence is computed per weekly
    checkpoint. A reminder is skipped when one already exists for the same
    service and occurrence date, either in `existing_notifications` or
    earlier in this batch, or when its deadline has already passed.

    Args:
        services: Recurring services
        existing_notifications: Notifications already stored
        weeks_ahead: Number of weekly checkpoints to look at
        now: Current moment (defaults to now)
        assigned_to: User ID to assign new reminders to

    Returns:
        New notifications, not yet stored
    """
    if now is None:
        now = datetime.now()

    existing = list(existing_notifications)
    new_notifications: list[SetlistNotification] = []

    for service in services:
        if not service.active:
            continue

        for week in range(weeks_ahead):
            check_date = now + timedelta(weeks=week)
            service_date = get_next_service_date(service, check_date)
            reminders = calculate_reminder_dates(service, service_date)
            occurrence = service_date.date()

            if _has_setlist_reminder(existing, service.id, occurrence) or _has_setlist_reminder(
                new_notifications, service.id, occurrence
            ):
                logger.debug(f"Setlist reminder exists for {service.id} on {occurrence}")
                continue

            if reminders.setlist_reminder <= now:
                continue

            epoch_ms = int(service_date.timestamp() * 1000)
            new_notifications.append(
                SetlistNotification(
                    id=f"notif_setlist_{service.id}_{epoch_ms}",
                    type=SETLIST_REMINDER,
                    service_id=service.id,
                    target_date=occurrence.isoformat(),
                    status="pending",
                    assigned_to=assigned_to,
                    message=(
                        f"Reminder: Create setlist for {service.title} "
                        f"({_display_date(service_date)})"
                    ),
                    created_at=now.isoformat(),
                )
            )

    logger.info(f"Generated {len(new_notifications)} new setlist reminders")
    return new_notifications


def get_active_notifications(
    notifications: Iterable[SetlistNotification],
    current_date: Optional[Union[date, datetime]] = None,
    window_days: int = 7,
) -> list[SetlistNotification]:
    """Get pending notifications for services in the coming week.

    Args:
        notifications: Notifications to filter
        current_date: Reference date (defaults to today)
        window_days: Days ahead to include

    Returns:
        Pending notifications whose target date is between the reference
        date and `window_days` later, inclusive
    """
    today = _as_date(current_date) if current_date is not None else date.today()
    active = []
    for notification in notifications:
        if not notification.is_pending:
            continue
        days_until = (_as_date(notification.target_date) - today).days
        if 0 <= days_until <= window_days:
            active.append(notification)
    return active


def is_setlist_overdue(
    service: RecurringService,
    target_date: str,
    has_setlist: bool,
    now: Optional[datetime] = None,
) -> bool:
    """Check whether a service's setlist deadline has passed.

    Args:
        service: The recurring service
        target_date: Occurrence date (YYYY-MM-DD)
        has_setlist: Whether a setlist already exists
        now: Current moment (defaults to now)

    Returns:
        True if no setlist exists and the reminder deadline is in the past
    """
    if has_setlist:
        return False
    if now is None:
        now = datetime.now()

    service_date = datetime.fromisoformat(target_date)
    reminder_date = service_date - timedelta(days=service.setlist_reminder_days)
    return now > reminder_date


def format_service_time(time_str: str) -> str:
    """Format a 24-hour time for display, e.g. "19:30" -> "7:30 PM"."""
    hours, minutes = _parse_time(time_str)
    period = "PM" if hours >= 12 else "AM"
    display_hours = hours - 12 if hours > 12 else (12 if hours == 0 else hours)
    return f"{display_hours}:{minutes:02d} {period}"


def get_day_name(day_of_week: int) -> str:
    """Get the weekday name for 0 = Sunday ... 6 = Saturday.

    Raises:
        ValueError: If day_of_week is outside 0-6
    """
    if not 0 <= day_of_week <= 6:
        raise ValueError(f"Day of week must be 0-6, got {day_of_week}")
    return DAY_NAMES[day_of_week]



def generate_setlist_id(service_id: str, target_date: str) -> str:
    """Build the manual setlist ID for a service occurrence."""
    return f"setlist_{service_id}_{target_date.replace('-', '')}"
