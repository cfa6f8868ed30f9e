"""Utility helpers for the app-preferences library."""

from .paths import default_user_data_dir, resolve_home
from .scheduler import CoalescingWriteScheduler, SchedulerFactory, SchedulerState, WriteScheduler

__all__ = [
    "CoalescingWriteScheduler",
    "SchedulerFactory",
    "SchedulerState",
    "WriteScheduler",
    "default_user_data_dir",
    "resolve_home",
]
