"""Scheduling, setlist composition and transposition services."""

from worship_planner.services.music import (
    InvalidKeyError,
    calculate_transposition,
    generate_transposition_chart,
    get_capo_key,
)
from worship_planner.services.scheduling import (
    calculate_reminder_dates,
    generate_upcoming_notifications,
    get_active_notifications,
    get_next_service_date,
    is_setlist_overdue,
)
from worship_planner.services.setlist import (
    InvalidTemplateError,
    adjust_setlist_keys,
    generate_auto_setlist,
    generate_setlist_summary,
    optimize_key_flow,
)

__all__ = [
    "InvalidKeyError",
    "InvalidTemplateError",
    "adjust_setlist_keys",
    "calculate_reminder_dates",
    "calculate_transposition",
    "generate_auto_setlist",
    "generate_setlist_summary",
    "generate_transposition_chart",
    "generate_upcoming_notifications",
    "get_active_notifications",
    "get_capo_key",
    "get_next_service_date",
    "is_setlist_overdue",
    "optimize_key_flow",
]
