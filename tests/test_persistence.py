import sqlite3

import pytest
from fakes import FailingDeleteConnection, FakeTicker, advance

from eyerest.core.engine import Keys, ReminderEngine
from eyerest.core.session import SessionPhase


def _reload(storage, clock) -> ReminderEngine:
    engine = ReminderEngine(storage=storage, now=clock, ticker=FakeTicker())
    engine.activate(start_ticker=False)
    return engine


def test_state_persists_across_relaunch(engine, storage, clock) -> None:
    engine.set_work_interval(5)
    engine.set_break_duration(7)
    advance(engine, clock, 300)
    assert engine.waiting_for_rest_confirmation is True
    assert engine.reminders_sent == 1

    reloaded = _reload(storage, clock)

    assert reloaded.work_interval_minutes == 5
    assert reloaded.break_duration_minutes == 7
    assert reloaded.waiting_for_rest_confirmation is True
    assert reloaded.phase == SessionPhase.WORKING
    assert reloaded.remaining_work_seconds == 0
    assert reloaded.reminders_sent == 1


def test_range_persists_across_relaunch(engine, storage, clock) -> None:
    engine.set_work_range(12, 88)
    engine.set_break_range(1, 33)

    reloaded = _reload(storage, clock)

    assert (reloaded.work_min_minutes, reloaded.work_max_minutes) == (12, 88)
    assert (reloaded.break_min_minutes, reloaded.break_max_minutes) == (1, 33)


def test_fullscreen_exit_option_defaults_to_enabled_and_persists(engine, storage, clock) -> None:
    assert engine.allow_exit_fullscreen_during_break is True
    engine.set_allow_exit_fullscreen_during_break(False)

    reloaded = _reload(storage, clock)

    assert reloaded.allow_exit_fullscreen_during_break is False


def test_work_countdown_resumes_from_saved_value(engine, storage, clock) -> None:
    engine.set_work_interval(5)
    advance(engine, clock, 90)

    reloaded = _reload(storage, clock)

    assert reloaded.remaining_work_seconds == 210


def test_break_deadline_persists_and_counts_wall_clock(engine, storage, clock) -> None:
    engine.set_break_duration(1)
    engine.confirm_rest()
    deadline = engine.break_end_date

    clock.advance(20)
    reloaded = _reload(storage, clock)

    assert reloaded.phase == SessionPhase.RESTING
    assert reloaded.break_end_date == deadline
    assert reloaded.remaining_break_seconds == 40


def test_break_that_ended_while_closed_resumes_work(engine, storage, clock) -> None:
    engine.set_work_interval(5)
    engine.set_break_duration(1)
    engine.confirm_rest()

    clock.advance(3 * 60 * 60)
    reloaded = _reload(storage, clock)

    assert reloaded.phase == SessionPhase.WORKING
    assert reloaded.break_end_date is None
    assert reloaded.remaining_break_seconds == 0
    assert reloaded.remaining_work_seconds == 300
    assert storage.has_setting(Keys.BREAK_END_DATE) is False


def test_break_deadline_written_with_resting_phase(engine, storage) -> None:
    engine.confirm_rest()

    assert storage.get_str(Keys.PHASE) == SessionPhase.RESTING.value
    assert storage.get_datetime(Keys.BREAK_END_DATE) == engine.break_end_date


def test_failed_save_keeps_stored_break_intact(engine, storage, clock, monkeypatch) -> None:
    engine.set_break_duration(1)
    engine.confirm_rest()
    deadline = engine.break_end_date
    connect = storage._connect
    monkeypatch.setattr(storage, "_connect", lambda: FailingDeleteConnection(connect()))

    with pytest.raises(sqlite3.OperationalError):
        engine.skip_rest()

    monkeypatch.undo()
    reloaded = _reload(storage, clock)
    assert reloaded.phase == SessionPhase.RESTING
    assert reloaded.break_end_date == deadline


def test_missing_break_deadline_resumes_work(engine, storage, clock) -> None:
    engine.confirm_rest()
    storage.remove_setting(Keys.BREAK_END_DATE)

    reloaded = _reload(storage, clock)

    assert reloaded.phase == SessionPhase.WORKING
    assert reloaded.remaining_work_seconds == reloaded.configured_work_seconds


def test_corrupt_break_deadline_resumes_work(engine, storage, clock) -> None:
    engine.confirm_rest()
    storage.set_setting(Keys.BREAK_END_DATE, "not a timestamp")

    reloaded = _reload(storage, clock)

    assert reloaded.phase == SessionPhase.WORKING


def test_stale_countdowns_are_clamped(storage, clock) -> None:
    storage.set_settings(
        {
            Keys.WORK_INTERVAL_MINUTES: 5,
            Keys.REMAINING_WORK_SECONDS: 99999,
            Keys.SECONDS_UNTIL_NEXT_REMINDER: 0,
            Keys.BREAK_END_DATE: "2023-11-14T22:00:00+00:00",
        }
    )

    engine = _reload(storage, clock)

    assert engine.remaining_work_seconds == 300
    assert engine.seconds_until_next_reminder == 300
    assert engine.break_end_date is None


def test_negative_countdown_resets_to_full_interval(storage, clock) -> None:
    storage.set_settings({Keys.REMAINING_WORK_SECONDS: -5, Keys.SECONDS_UNTIL_NEXT_REMINDER: 1000})

    engine = _reload(storage, clock)

    assert engine.remaining_work_seconds == 1200
    assert engine.seconds_until_next_reminder == 300


def test_corrupt_values_fall_back_to_defaults(storage, clock) -> None:
    storage.set_settings(
        {
            Keys.PHASE: "napping",
            Keys.WORK_INTERVAL_MINUTES: "twenty",
            Keys.BREAK_DURATION_MINUTES: None,
            Keys.WAITING_FOR_REST_CONFIRMATION: "yes",
            Keys.REMINDERS_SENT: -3,
        }
    )

    engine = _reload(storage, clock)

    assert engine.phase == SessionPhase.WORKING
    assert engine.work_interval_minutes == 20
    assert engine.break_duration_minutes == 5
    assert engine.waiting_for_rest_confirmation is False
    assert engine.reminders_sent == 0


def test_stored_interval_clamped_into_stored_range(storage, clock) -> None:
    storage.set_settings({Keys.WORK_MIN_MINUTES: 30, Keys.WORK_MAX_MINUTES: 45, Keys.WORK_INTERVAL_MINUTES: 90})

    engine = _reload(storage, clock)

    assert engine.work_interval_minutes == 45


def test_overlay_and_lock_flags_do_not_survive_restart(make_engine, storage, clock) -> None:
    engine = make_engine()
    engine.set_screen_locked(True)
    engine.confirm_rest()
    engine.show_fullscreen_break_countdown_if_resting()

    reloaded = _reload(storage, clock)

    assert reloaded.is_screen_locked is False
    assert reloaded.is_fullscreen_reminder_visible is False
    assert reloaded.phase == SessionPhase.RESTING


def test_reconciliation_is_idempotent(engine, storage, clock) -> None:
    engine.set_work_interval(5)
    advance(engine, clock, 42)

    first = ReminderEngine(storage=storage, now=clock)
    second = ReminderEngine(storage=storage, now=clock)
    assert first.snapshot() == second.snapshot()

    snapshot = second.snapshot()
    second.reconcile_after_launch()
    assert second.snapshot() == snapshot


def test_reconciliation_is_idempotent_while_resting(engine, storage, clock) -> None:
    engine.confirm_rest()
    advance(engine, clock, 10)

    first = ReminderEngine(storage=storage, now=clock)
    second = ReminderEngine(storage=storage, now=clock)

    assert first.snapshot() == second.snapshot()
    assert second.remaining_break_seconds == 290


def test_initial_launch_requires_manual_start(engine) -> None:
    assert engine.needs_manual_start is True
    assert engine.should_auto_start_on_activation is False


def test_start_timing_enables_auto_start_for_next_launch(engine, storage, clock) -> None:
    engine.start_timing()
    assert engine.needs_manual_start is False
    assert engine.is_ticker_running is True

    ticker = FakeTicker()
    reloaded = ReminderEngine(storage=storage, now=clock, ticker=ticker)
    assert reloaded.should_auto_start_on_activation is True
    reloaded.activate()

    assert ticker.is_running is True
    assert reloaded.needs_manual_start is False


def test_start_timing_is_idempotent(make_engine) -> None:
    ticker = FakeTicker()
    engine = make_engine(ticker=ticker)

    engine.start_timing()
    engine.start_timing()

    assert ticker.start_calls == 1


def test_start_timing_requires_activation(storage, clock) -> None:
    ticker = FakeTicker()
    engine = ReminderEngine(storage=storage, now=clock, ticker=ticker)

    engine.start_timing()

    assert ticker.start_calls == 0
    assert engine.has_started_timer is False


def test_ticker_drives_engine(make_engine, clock) -> None:
    ticker = FakeTicker()
    engine = make_engine(ticker=ticker)
    engine.start_timing()

    clock.advance(1)
    ticker.callback()

    assert engine.remaining_work_seconds == 1199


def test_legacy_install_counts_as_started(storage, clock) -> None:
    storage.set_setting(Keys.WORK_INTERVAL_MINUTES, 25)

    engine = ReminderEngine(storage=storage, now=clock)

    assert engine.has_started_timer is True
    assert engine.work_interval_minutes == 25
