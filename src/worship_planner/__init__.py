"""Worship Planner - scheduling tools for worship teams.

This package provides tools for:
- Computing key transpositions and capo positions for leaders
- Composing setlists from section templates and a song pool
- Scheduling recurring services and their setlist reminders
"""

__version__ = "0.1.0"
