from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum


REMINDER_REPEAT_SECONDS = 5 * 60

DEFAULT_WORK_INTERVAL_MINUTES = 20.0
DEFAULT_BREAK_DURATION_MINUTES = 5.0
DEFAULT_WORK_RANGE = (0.0, 120.0)
DEFAULT_BREAK_RANGE = (0.0, 60.0)


def _rounded_seconds(minutes: float) -> int:
    # Halves round up; minutes are never negative after clamping.
    return int(math.floor(minutes * 60 + 0.5))


class SessionPhase(str, Enum):
    WORKING = "working"
    RESTING = "resting"


class AppLanguage(str, Enum):
    ZH_HANS = "zh-Hans"
    EN = "en"


@dataclass
class Session:
    """Live reminder state. Mutated only by ``ReminderEngine``."""

    phase: SessionPhase = SessionPhase.WORKING
    work_interval_minutes: float = DEFAULT_WORK_INTERVAL_MINUTES
    break_duration_minutes: float = DEFAULT_BREAK_DURATION_MINUTES
    work_min_minutes: float = DEFAULT_WORK_RANGE[0]
    work_max_minutes: float = DEFAULT_WORK_RANGE[1]
    break_min_minutes: float = DEFAULT_BREAK_RANGE[0]
    break_max_minutes: float = DEFAULT_BREAK_RANGE[1]
    remaining_work_seconds: int = int(DEFAULT_WORK_INTERVAL_MINUTES * 60)
    waiting_for_rest_confirmation: bool = False
    seconds_until_next_reminder: int = REMINDER_REPEAT_SECONDS
    break_end_date: datetime | None = None
    remaining_break_seconds: int = 0
    reminders_sent: int = 0
    is_screen_locked: bool = False
    is_fullscreen_reminder_visible: bool = False
    has_started_timer: bool = False
    allow_exit_fullscreen_during_break: bool = True
    language: AppLanguage = AppLanguage.EN

    @property
    def configured_work_seconds(self) -> int:
        return _rounded_seconds(self.work_interval_minutes)

    @property
    def configured_break_seconds(self) -> int:
        return _rounded_seconds(self.break_duration_minutes)

    @property
    def is_awaiting_confirmation(self) -> bool:
        return self.phase == SessionPhase.WORKING and self.waiting_for_rest_confirmation
