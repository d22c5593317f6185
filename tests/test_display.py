from fakes import advance

from eyerest.core.i18n import format_minutes, format_seconds, translate
from eyerest.core.session import AppLanguage


def test_format_seconds() -> None:
    assert format_seconds(0) == "00:00"
    assert format_seconds(59) == "00:59"
    assert format_seconds(3725) == "62:05"
    assert format_seconds(-5) == "00:00"


def test_format_minutes() -> None:
    assert format_minutes(20, AppLanguage.EN) == "20 min"
    assert format_minutes(7.5, AppLanguage.EN) == "7.5 min"
    assert format_minutes(20.004, AppLanguage.EN) == "20 min"
    assert format_minutes(5, AppLanguage.ZH_HANS) == "5 分钟"


def test_translate_fills_placeholders() -> None:
    assert translate("countdown.working", AppLanguage.EN, time="01:00") == "Reminder in 01:00"
    assert translate("countdown.working", AppLanguage.ZH_HANS, time="01:00") == "距离提醒 01:00"


def test_lines_before_first_start(engine) -> None:
    engine.set_language(AppLanguage.EN)

    assert engine.mode_title == "Ready to Start"
    assert engine.countdown_line == "Ready duration 20:00"
    assert engine.status_line == "Please click “Start Timer” the first time you open the app."


def test_lines_follow_phase(engine, clock) -> None:
    engine.set_language(AppLanguage.EN)
    engine.start_timing()
    engine.set_work_interval(5)
    assert engine.mode_title == "Working"
    assert engine.countdown_line == "Reminder in 05:00"
    assert engine.status_line == "Stay focused."

    engine.set_screen_locked(True)
    assert engine.mode_title == "Working (Paused While Screen Locked)"
    assert engine.status_line == "Screen is locked, work timer is paused."
    engine.set_screen_locked(False)

    advance(engine, clock, 310)
    assert engine.mode_title == "Awaiting Break Confirmation"
    assert engine.countdown_line == "Next reminder in 04:50"

    engine.confirm_rest()
    assert engine.mode_title == "On Break"
    assert engine.countdown_line == "Break remaining 05:00"
    assert engine.status_line == "Look into the distance to relax your eye muscles."


def test_descriptions_follow_language(engine) -> None:
    engine.set_language(AppLanguage.EN)
    engine.set_work_interval(7.5)
    assert engine.work_interval_description == "7.5 min"
    assert engine.break_duration_description == "5 min"

    engine.set_language(AppLanguage.ZH_HANS)
    assert engine.work_interval_description == "7.5 分钟"
    assert engine.mode_title == "等待开始计时"
