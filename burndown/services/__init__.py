"""Burndown calculation helpers."""

from burndown.services.calendar import Calendar, DayRange
from burndown.services.dataset import assemble_dataset, count_working_days
from burndown.services.densifier import densify
from burndown.services.guideline import generate_guideline

__all__ = [
    "Calendar",
    "DayRange",
    "densify",
    "generate_guideline",
    "assemble_dataset",
    "count_working_days",
]
