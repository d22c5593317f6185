from __future__ import annotations

import dataclasses
import logging
import math
from datetime import datetime, timedelta, timezone

from PyQt6.QtCore import QObject, pyqtSignal

from eyerest.core.i18n import format_minutes, format_seconds, preferred_language, translate
from eyerest.core.ports import (
    Clock,
    FullscreenContextPredicate,
    FullscreenPresenter,
    NotificationError,
    Notifier,
    Ticker,
)
from eyerest.core.session import (
    DEFAULT_BREAK_RANGE,
    DEFAULT_WORK_RANGE,
    REMINDER_REPEAT_SECONDS,
    AppLanguage,
    Session,
    SessionPhase,
)
from eyerest.core.settings import clamp, normalize_range
from eyerest.data.storage import Storage


logger = logging.getLogger(__name__)


class Keys:
    WORK_INTERVAL_MINUTES = "work_interval_minutes"
    BREAK_DURATION_MINUTES = "break_duration_minutes"
    WORK_MIN_MINUTES = "work_min_minutes"
    WORK_MAX_MINUTES = "work_max_minutes"
    BREAK_MIN_MINUTES = "break_min_minutes"
    BREAK_MAX_MINUTES = "break_max_minutes"
    PHASE = "phase"
    REMAINING_WORK_SECONDS = "remaining_work_seconds"
    WAITING_FOR_REST_CONFIRMATION = "waiting_for_rest_confirmation"
    SECONDS_UNTIL_NEXT_REMINDER = "seconds_until_next_reminder"
    BREAK_END_DATE = "break_end_date"
    REMAINING_BREAK_SECONDS = "remaining_break_seconds"
    REMINDERS_SENT = "reminders_sent"
    IS_SCREEN_LOCKED = "is_screen_locked"
    IS_FULLSCREEN_REMINDER_VISIBLE = "is_fullscreen_reminder_visible"
    HAS_STARTED_TIMER = "has_started_timer"
    ALLOW_EXIT_FULLSCREEN_DURING_BREAK = "allow_exit_fullscreen_during_break"
    APP_LANGUAGE = "app_language"
    NOTIFICATION_AUTHORIZATION_REQUESTED = "notification_authorization_requested"
    NOTIFICATION_ENABLE_HINT_SHOWN = "notification_enable_hint_shown"


# Keys whose presence marks an install that predates ``has_started_timer``.
_LEGACY_STARTED_KEYS = (
    Keys.NOTIFICATION_AUTHORIZATION_REQUESTED,
    Keys.WORK_INTERVAL_MINUTES,
    Keys.BREAK_DURATION_MINUTES,
    Keys.REMAINING_WORK_SECONDS,
)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ReminderEngine(QObject):
    """Work/break state machine driven by a one-second ticker.

    Every mutation is written back to ``storage`` and announced through
    ``state_changed``. Collaborators are optional so the engine can run
    headless; without a presenter every reminder goes out as a notification.
    """

    state_changed = pyqtSignal()
    phase_changed = pyqtSignal(str)
    reminder_fired = pyqtSignal(int)
    notification_status_changed = pyqtSignal(str)

    def __init__(
        self,
        storage: Storage,
        notifier: Notifier | None = None,
        presenter: FullscreenPresenter | None = None,
        is_fullscreen_context: FullscreenContextPredicate | None = None,
        now: Clock | None = None,
        ticker: Ticker | None = None,
    ) -> None:
        super().__init__()
        self._storage = storage
        self._notifier = notifier
        self._presenter = presenter
        self._is_fullscreen_context = is_fullscreen_context
        self._now = now or _utc_now
        self._ticker = ticker
        self._session = Session()
        self._is_activated = False
        self.notification_status_text = ""
        self.should_show_notification_enable_hint = False
        self._load_state()
        self.reconcile_after_launch()

    # -- read-only state -----------------------------------------------------

    def snapshot(self) -> Session:
        return dataclasses.replace(self._session)

    @property
    def phase(self) -> SessionPhase:
        return self._session.phase

    @property
    def work_interval_minutes(self) -> float:
        return self._session.work_interval_minutes

    @property
    def break_duration_minutes(self) -> float:
        return self._session.break_duration_minutes

    @property
    def work_min_minutes(self) -> float:
        return self._session.work_min_minutes

    @property
    def work_max_minutes(self) -> float:
        return self._session.work_max_minutes

    @property
    def break_min_minutes(self) -> float:
        return self._session.break_min_minutes

    @property
    def break_max_minutes(self) -> float:
        return self._session.break_max_minutes

    @property
    def remaining_work_seconds(self) -> int:
        return self._session.remaining_work_seconds

    @property
    def waiting_for_rest_confirmation(self) -> bool:
        return self._session.waiting_for_rest_confirmation

    @property
    def seconds_until_next_reminder(self) -> int:
        return self._session.seconds_until_next_reminder

    @property
    def break_end_date(self) -> datetime | None:
        return self._session.break_end_date

    @property
    def remaining_break_seconds(self) -> int:
        return self._session.remaining_break_seconds

    @property
    def reminders_sent(self) -> int:
        return self._session.reminders_sent

    @property
    def is_screen_locked(self) -> bool:
        return self._session.is_screen_locked

    @property
    def is_fullscreen_reminder_visible(self) -> bool:
        return self._session.is_fullscreen_reminder_visible

    @property
    def has_started_timer(self) -> bool:
        return self._session.has_started_timer

    @property
    def allow_exit_fullscreen_during_break(self) -> bool:
        return self._session.allow_exit_fullscreen_during_break

    @property
    def language(self) -> AppLanguage:
        return self._session.language

    @property
    def configured_work_seconds(self) -> int:
        return self._session.configured_work_seconds

    @property
    def configured_break_seconds(self) -> int:
        return self._session.configured_break_seconds

    @property
    def is_activated(self) -> bool:
        return self._is_activated

    @property
    def is_ticker_running(self) -> bool:
        return self._ticker is not None and self._ticker.is_running

    @property
    def should_auto_start_on_activation(self) -> bool:
        return self._session.has_started_timer

    @property
    def needs_manual_start(self) -> bool:
        return not self._session.has_started_timer and not self.is_ticker_running

    @property
    def can_confirm_rest(self) -> bool:
        return self._session.phase == SessionPhase.WORKING

    # -- activation and ticking ----------------------------------------------

    def activate(self, start_ticker: bool | None = None) -> None:
        if self._is_activated:
            return
        self._is_activated = True
        if start_ticker is None:
            start_ticker = self.should_auto_start_on_activation
        if start_ticker:
            self._session.has_started_timer = True
            self._start_ticking()

        if self._notifier is not None:
            if not self._storage.get_bool(Keys.NOTIFICATION_ENABLE_HINT_SHOWN, False):
                self.should_show_notification_enable_hint = True
            self._request_notification_authorization_once()
        self.refresh_notification_status()
        self._save_state()

    def start_timing(self) -> None:
        if not self._is_activated or self.is_ticker_running:
            return
        self._session.has_started_timer = True
        self._start_ticking()
        logger.info("Timer started")
        self._save_state()

    def stop_ticking(self) -> None:
        if self._ticker is not None:
            self._ticker.stop()

    def _start_ticking(self) -> None:
        if self._ticker is None:
            logger.warning("No ticker configured; the engine must be ticked externally")
            return
        self._ticker.start(self.tick)

    def tick(self) -> None:
        if self._session.phase == SessionPhase.WORKING:
            self._tick_working_cycle()
        else:
            self._tick_resting_cycle()
        self._save_state()

    def advance(self, seconds: int) -> None:
        for _ in range(max(0, seconds)):
            self.tick()

    def _tick_working_cycle(self) -> None:
        session = self._session
        if session.waiting_for_rest_confirmation:
            if session.is_fullscreen_reminder_visible or session.is_screen_locked:
                return
            if session.seconds_until_next_reminder > 0:
                session.seconds_until_next_reminder -= 1
            if session.seconds_until_next_reminder <= 0:
                self._trigger_reminder_presentation()
                session.seconds_until_next_reminder = REMINDER_REPEAT_SECONDS
            return

        if session.is_screen_locked:
            return
        if session.remaining_work_seconds > 0:
            session.remaining_work_seconds -= 1
        if session.remaining_work_seconds <= 0:
            session.remaining_work_seconds = 0
            session.waiting_for_rest_confirmation = True
            session.seconds_until_next_reminder = REMINDER_REPEAT_SECONDS
            logger.info("Work interval elapsed, awaiting rest confirmation")
            self._trigger_reminder_presentation()

    def _tick_resting_cycle(self) -> None:
        end = self._session.break_end_date
        if end is None:
            self.finish_rest_cycle()
            return
        self._session.remaining_break_seconds = self._calculated_remaining_break_seconds()
        if self._current_time() >= end:
            self.finish_rest_cycle()

    # -- configuration -------------------------------------------------------

    def set_work_interval(self, minutes: float) -> None:
        if not math.isfinite(minutes):
            return
        session = self._session
        clamped = clamp(minutes, session.work_min_minutes, session.work_max_minutes)
        if clamped == session.work_interval_minutes:
            return
        session.work_interval_minutes = clamped
        if session.phase == SessionPhase.WORKING and not session.waiting_for_rest_confirmation:
            session.remaining_work_seconds = session.configured_work_seconds
        else:
            session.remaining_work_seconds = min(session.remaining_work_seconds, session.configured_work_seconds)
        self._save_state()

    def nudge_work_interval(self, delta: float) -> None:
        self.set_work_interval(self._session.work_interval_minutes + delta)

    def set_break_duration(self, minutes: float) -> None:
        if not math.isfinite(minutes):
            return
        session = self._session
        clamped = clamp(minutes, session.break_min_minutes, session.break_max_minutes)
        if clamped == session.break_duration_minutes:
            return
        session.break_duration_minutes = clamped
        if session.phase == SessionPhase.RESTING:
            session.break_end_date = self._current_time() + timedelta(seconds=session.configured_break_seconds)
            session.remaining_break_seconds = session.configured_break_seconds
        self._save_state()

    def nudge_break_duration(self, delta: float) -> None:
        self.set_break_duration(self._session.break_duration_minutes + delta)

    def set_work_range(self, minimum: float, maximum: float) -> None:
        if not (math.isfinite(minimum) and math.isfinite(maximum)):
            return
        session = self._session
        new_min, new_max = normalize_range(minimum, maximum, fallback_max=maximum)
        changed = (session.work_min_minutes, session.work_max_minutes) != (new_min, new_max)
        session.work_min_minutes = new_min
        session.work_max_minutes = new_max
        self.set_work_interval(session.work_interval_minutes)
        if changed:
            self._save_state()

    def set_break_range(self, minimum: float, maximum: float) -> None:
        if not (math.isfinite(minimum) and math.isfinite(maximum)):
            return
        session = self._session
        new_min, new_max = normalize_range(minimum, maximum, fallback_max=maximum)
        changed = (session.break_min_minutes, session.break_max_minutes) != (new_min, new_max)
        session.break_min_minutes = new_min
        session.break_max_minutes = new_max
        self.set_break_duration(session.break_duration_minutes)
        if changed:
            self._save_state()

    def set_allow_exit_fullscreen_during_break(self, allow: bool) -> None:
        if self._session.allow_exit_fullscreen_during_break == allow:
            return
        self._session.allow_exit_fullscreen_during_break = allow
        self._save_state()

    def set_screen_locked(self, locked: bool) -> None:
        if self._session.is_screen_locked == locked:
            return
        self._session.is_screen_locked = locked
        logger.info("Screen %s", "locked" if locked else "unlocked")
        self._save_state()

    def set_language(self, language: AppLanguage) -> None:
        if self._session.language == language:
            return
        self._session.language = language
        self.refresh_notification_status()
        self._save_state()

    def dismiss_notification_enable_hint(self) -> None:
        if not self.should_show_notification_enable_hint:
            return
        self.should_show_notification_enable_hint = False
        self._storage.set_setting(Keys.NOTIFICATION_ENABLE_HINT_SHOWN, True)
        self.state_changed.emit()

    # -- user actions --------------------------------------------------------

    def confirm_rest(self) -> None:
        if self._session.phase != SessionPhase.WORKING:
            return
        self._start_rest_cycle(show_fullscreen_countdown=False)

    def confirm_rest_from_fullscreen_reminder(self) -> None:
        if not self._session.is_awaiting_confirmation:
            return
        self._session.is_fullscreen_reminder_visible = False
        self._start_rest_cycle(show_fullscreen_countdown=True)

    def snooze_rest_reminder(self) -> None:
        if not self._session.is_awaiting_confirmation:
            return
        self._session.is_fullscreen_reminder_visible = False
        self._hide_overlay()
        self._session.seconds_until_next_reminder = REMINDER_REPEAT_SECONDS
        logger.info("Rest reminder snoozed")
        self._save_state()

    def dismiss_fullscreen_break_overlay(self) -> None:
        if self._session.phase != SessionPhase.RESTING:
            return
        self._session.is_fullscreen_reminder_visible = False
        self._hide_overlay()
        self._save_state()

    def show_fullscreen_break_countdown_if_resting(self) -> None:
        if self._session.phase != SessionPhase.RESTING:
            return
        self._session.is_fullscreen_reminder_visible = True
        if self._presenter is not None:
            self._presenter.show_break_countdown(self.dismiss_fullscreen_break_overlay)
        self._save_state()

    def skip_rest(self) -> None:
        if not self._session.allow_exit_fullscreen_during_break:
            return
        if self._session.phase != SessionPhase.RESTING:
            return
        logger.info("Break skipped")
        self.finish_rest_cycle()

    # -- phase transitions ---------------------------------------------------

    def _start_rest_cycle(self, show_fullscreen_countdown: bool) -> None:
        session = self._session
        session.waiting_for_rest_confirmation = False
        session.seconds_until_next_reminder = REMINDER_REPEAT_SECONDS
        session.phase = SessionPhase.RESTING
        session.break_end_date = self._current_time() + timedelta(seconds=session.configured_break_seconds)
        session.remaining_break_seconds = session.configured_break_seconds
        session.is_fullscreen_reminder_visible = show_fullscreen_countdown
        if show_fullscreen_countdown:
            if self._presenter is not None:
                self._presenter.show_break_countdown(self.dismiss_fullscreen_break_overlay)
        else:
            self._hide_overlay()
        self._clear_reminder_notifications()
        logger.info("Break started for %d seconds", session.configured_break_seconds)
        self.phase_changed.emit(session.phase.value)
        self._save_state()

    def finish_rest_cycle(self) -> None:
        session = self._session
        if session.phase != SessionPhase.RESTING:
            return
        session.phase = SessionPhase.WORKING
        session.break_end_date = None
        session.remaining_break_seconds = 0
        session.waiting_for_rest_confirmation = False
        session.seconds_until_next_reminder = REMINDER_REPEAT_SECONDS
        session.remaining_work_seconds = session.configured_work_seconds
        session.is_fullscreen_reminder_visible = False
        self._hide_overlay()
        logger.info("Break finished, next reminder in %d seconds", session.remaining_work_seconds)
        self.phase_changed.emit(session.phase.value)
        self._save_state()

    # -- presentation --------------------------------------------------------

    def _trigger_reminder_presentation(self) -> None:
        session = self._session
        session.reminders_sent += 1
        if self._should_show_fullscreen_reminder():
            session.is_fullscreen_reminder_visible = True
            self._presenter.show_prompt(self.confirm_rest_from_fullscreen_reminder, self.snooze_rest_reminder)
        else:
            self._send_rest_reminder_notification()
        logger.info("Rest reminder #%d fired", session.reminders_sent)
        self.reminder_fired.emit(session.reminders_sent)

    def _should_show_fullscreen_reminder(self) -> bool:
        if self._presenter is None or self._is_fullscreen_context is None:
            return False
        return not self._is_fullscreen_context()

    def _hide_overlay(self) -> None:
        if self._presenter is not None:
            self._presenter.hide()

    def _send_rest_reminder_notification(self) -> None:
        if not self._is_activated or self._notifier is None:
            return
        language = self._session.language
        try:
            self._notifier.send(
                translate("notification.title", language),
                translate("notification.body", language),
                translate("notification.action", language),
            )
        except NotificationError as exc:
            logger.warning("Failed to send rest reminder: %s", exc)
            self._set_notification_status(translate("notification.send_failed", language, error=exc))

    def _clear_reminder_notifications(self) -> None:
        if not self._is_activated or self._notifier is None:
            return
        try:
            self._notifier.clear_all()
        except NotificationError as exc:
            logger.warning("Failed to clear rest reminders: %s", exc)

    def _request_notification_authorization_once(self) -> None:
        if self._storage.get_bool(Keys.NOTIFICATION_AUTHORIZATION_REQUESTED, False):
            return
        self._storage.set_setting(Keys.NOTIFICATION_AUTHORIZATION_REQUESTED, True)
        try:
            self._notifier.request_authorization()
        except NotificationError as exc:
            logger.warning("Notification authorization failed: %s", exc)
            self._set_notification_status(
                translate("notification.auth_failed", self._session.language, error=exc)
            )

    def refresh_notification_status(self) -> None:
        if not self._is_activated:
            self._set_notification_status(translate("notification.checking", self._session.language))
            return
        if self._notifier is None:
            self._set_notification_status(translate("notification.unavailable", self._session.language))
            return
        status = self._notifier.authorization_status()
        self._set_notification_status(translate(f"notification.{status.value}", self._session.language))

    def _set_notification_status(self, text: str) -> None:
        if text == self.notification_status_text:
            return
        self.notification_status_text = text
        self.notification_status_changed.emit(text)

    # -- display -------------------------------------------------------------

    def _tr(self, key: str, **kwargs: object) -> str:
        return translate(key, self._session.language, **kwargs)

    @property
    def mode_title(self) -> str:
        session = self._session
        if self.needs_manual_start:
            return self._tr("mode.ready")
        if session.phase == SessionPhase.RESTING:
            return self._tr("mode.resting")
        if session.waiting_for_rest_confirmation:
            return self._tr("mode.awaiting")
        return self._tr("mode.working_locked" if session.is_screen_locked else "mode.working")

    @property
    def status_line(self) -> str:
        session = self._session
        if self.needs_manual_start:
            return self._tr("status.ready")
        if session.phase == SessionPhase.RESTING:
            return self._tr("status.resting_locked" if session.is_screen_locked else "status.resting")
        if session.waiting_for_rest_confirmation:
            return self._tr("status.awaiting")
        return self._tr("status.working_locked" if session.is_screen_locked else "status.working")

    @property
    def countdown_line(self) -> str:
        session = self._session
        if self.needs_manual_start:
            return self._tr("countdown.ready", time=format_seconds(session.remaining_work_seconds))
        if session.phase == SessionPhase.RESTING:
            return self._tr("countdown.resting", time=format_seconds(session.remaining_break_seconds))
        if session.waiting_for_rest_confirmation:
            return self._tr("countdown.awaiting", time=format_seconds(session.seconds_until_next_reminder))
        return self._tr("countdown.working", time=format_seconds(session.remaining_work_seconds))

    @property
    def work_interval_description(self) -> str:
        return format_minutes(self._session.work_interval_minutes, self._session.language)

    @property
    def break_duration_description(self) -> str:
        return format_minutes(self._session.break_duration_minutes, self._session.language)

    @property
    def break_countdown_text(self) -> str:
        return format_seconds(self._session.remaining_break_seconds)

    # -- time ----------------------------------------------------------------

    def _current_time(self) -> datetime:
        value = self._now()
        return value if value.tzinfo is not None else value.astimezone()

    def _calculated_remaining_break_seconds(self) -> int:
        end = self._session.break_end_date
        if end is None:
            return 0
        return max(0, math.floor((end - self._current_time()).total_seconds()))

    # -- persistence ---------------------------------------------------------

    def _load_state(self) -> None:
        storage = self._storage
        session = self._session

        raw_language = storage.get_str(Keys.APP_LANGUAGE)
        try:
            session.language = AppLanguage(raw_language) if raw_language else preferred_language()
        except ValueError:
            session.language = preferred_language()
        self.notification_status_text = translate("notification.checking", session.language)

        if storage.has_setting(Keys.WORK_MIN_MINUTES) or storage.has_setting(Keys.WORK_MAX_MINUTES):
            session.work_min_minutes, session.work_max_minutes = normalize_range(
                storage.get_float(Keys.WORK_MIN_MINUTES, session.work_min_minutes),
                storage.get_float(Keys.WORK_MAX_MINUTES, session.work_max_minutes),
                fallback_max=DEFAULT_WORK_RANGE[1],
            )
        if storage.has_setting(Keys.BREAK_MIN_MINUTES) or storage.has_setting(Keys.BREAK_MAX_MINUTES):
            session.break_min_minutes, session.break_max_minutes = normalize_range(
                storage.get_float(Keys.BREAK_MIN_MINUTES, session.break_min_minutes),
                storage.get_float(Keys.BREAK_MAX_MINUTES, session.break_max_minutes),
                fallback_max=DEFAULT_BREAK_RANGE[1],
            )

        session.allow_exit_fullscreen_during_break = storage.get_bool(Keys.ALLOW_EXIT_FULLSCREEN_DURING_BREAK, True)
        session.work_interval_minutes = clamp(
            storage.get_float(Keys.WORK_INTERVAL_MINUTES, session.work_interval_minutes),
            session.work_min_minutes,
            session.work_max_minutes,
        )
        session.break_duration_minutes = clamp(
            storage.get_float(Keys.BREAK_DURATION_MINUTES, session.break_duration_minutes),
            session.break_min_minutes,
            session.break_max_minutes,
        )

        raw_phase = storage.get_str(Keys.PHASE)
        if raw_phase is not None:
            try:
                session.phase = SessionPhase(raw_phase)
            except ValueError:
                logger.warning("Ignoring unknown stored phase %r", raw_phase)

        session.remaining_work_seconds = max(
            0, storage.get_int(Keys.REMAINING_WORK_SECONDS, session.configured_work_seconds)
        )
        session.waiting_for_rest_confirmation = storage.get_bool(Keys.WAITING_FOR_REST_CONFIRMATION, False)
        session.seconds_until_next_reminder = storage.get_int(
            Keys.SECONDS_UNTIL_NEXT_REMINDER, session.seconds_until_next_reminder
        )
        session.break_end_date = storage.get_datetime(Keys.BREAK_END_DATE)
        session.remaining_break_seconds = max(0, storage.get_int(Keys.REMAINING_BREAK_SECONDS, 0))
        session.reminders_sent = max(0, storage.get_int(Keys.REMINDERS_SENT, 0))
        session.is_screen_locked = storage.get_bool(Keys.IS_SCREEN_LOCKED, False)
        session.is_fullscreen_reminder_visible = storage.get_bool(Keys.IS_FULLSCREEN_REMINDER_VISIBLE, False)

        has_started = storage.get_bool(Keys.HAS_STARTED_TIMER)
        if has_started is None:
            has_started = any(storage.has_setting(key) for key in _LEGACY_STARTED_KEYS)
        session.has_started_timer = has_started

    def reconcile_after_launch(self) -> None:
        """Corrects loaded state for elapsed wall-clock time and invalid values."""
        session = self._session
        # Overlays never survive a restart; the lock source re-signals.
        session.is_fullscreen_reminder_visible = False
        session.is_screen_locked = False

        if session.phase == SessionPhase.RESTING:
            session.waiting_for_rest_confirmation = False
            session.remaining_work_seconds = min(session.remaining_work_seconds, session.configured_work_seconds)
            if session.break_end_date is None:
                logger.warning("Resting without a break deadline, resuming work")
                self.finish_rest_cycle()
            else:
                session.remaining_break_seconds = self._calculated_remaining_break_seconds()
                if self._current_time() >= session.break_end_date:
                    logger.info("Break ended while the app was not running")
                    self.finish_rest_cycle()
        else:
            session.break_end_date = None
            session.remaining_break_seconds = 0
            if session.waiting_for_rest_confirmation:
                session.remaining_work_seconds = 0
            else:
                max_seconds = session.configured_work_seconds
                if session.remaining_work_seconds <= 0 or session.remaining_work_seconds > max_seconds:
                    session.remaining_work_seconds = max_seconds

        if not 0 < session.seconds_until_next_reminder <= REMINDER_REPEAT_SECONDS:
            session.seconds_until_next_reminder = REMINDER_REPEAT_SECONDS
        self._save_state()

    def _save_state(self) -> None:
        session = self._session
        values = {
            Keys.WORK_INTERVAL_MINUTES: session.work_interval_minutes,
            Keys.BREAK_DURATION_MINUTES: session.break_duration_minutes,
            Keys.WORK_MIN_MINUTES: session.work_min_minutes,
            Keys.WORK_MAX_MINUTES: session.work_max_minutes,
            Keys.BREAK_MIN_MINUTES: session.break_min_minutes,
            Keys.BREAK_MAX_MINUTES: session.break_max_minutes,
            Keys.APP_LANGUAGE: session.language.value,
            Keys.ALLOW_EXIT_FULLSCREEN_DURING_BREAK: session.allow_exit_fullscreen_during_break,
            Keys.PHASE: session.phase.value,
            Keys.REMAINING_WORK_SECONDS: session.remaining_work_seconds,
            Keys.WAITING_FOR_REST_CONFIRMATION: session.waiting_for_rest_confirmation,
            Keys.SECONDS_UNTIL_NEXT_REMINDER: session.seconds_until_next_reminder,
            Keys.REMAINING_BREAK_SECONDS: session.remaining_break_seconds,
            Keys.REMINDERS_SENT: session.reminders_sent,
            Keys.IS_SCREEN_LOCKED: session.is_screen_locked,
            Keys.IS_FULLSCREEN_REMINDER_VISIBLE: session.is_fullscreen_reminder_visible,
            Keys.HAS_STARTED_TIMER: session.has_started_timer,
        }
        removed: tuple[str, ...] = ()
        if session.break_end_date is None:
            removed = (Keys.BREAK_END_DATE,)
        else:
            values[Keys.BREAK_END_DATE] = session.break_end_date.isoformat()
        self._storage.set_settings(values, remove=removed)
        self.state_changed.emit()
