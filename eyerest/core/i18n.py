from __future__ import annotations

"""Bilingual message catalog and time formatting helpers."""

from PyQt6.QtCore import QLocale

from eyerest.core.session import AppLanguage


MESSAGES: dict[str, tuple[str, str]] = {
    "mode.ready": ("等待开始计时", "Ready to Start"),
    "mode.resting": ("休息中", "On Break"),
    "mode.awaiting": ("等待确认休息", "Awaiting Break Confirmation"),
    "mode.working_locked": ("工作中（锁屏暂停）", "Working (Paused While Screen Locked)"),
    "mode.working": ("工作中", "Working"),
    "status.ready": (
        "首次打开应用请点击“开始计时”。",
        "Please click “Start Timer” the first time you open the app.",
    ),
    "status.resting_locked": ("锁屏时休息计时继续。", "Break countdown continues while screen is locked."),
    "status.resting": ("请看向远处，放松眼部肌肉。", "Look into the distance to relax your eye muscles."),
    "status.awaiting": (
        "若未点击“确定休息”，将每 5 分钟再次提醒。",
        "If not confirmed, a reminder repeats every 5 minutes.",
    ),
    "status.working_locked": ("屏幕已锁定，工作计时暂停。", "Screen is locked, work timer is paused."),
    "status.working": ("专注工作中。", "Stay focused."),
    "countdown.ready": ("准备时长 {time}", "Ready duration {time}"),
    "countdown.resting": ("休息剩余 {time}", "Break remaining {time}"),
    "countdown.awaiting": ("下次提醒倒计时 {time}", "Next reminder in {time}"),
    "countdown.working": ("距离提醒 {time}", "Reminder in {time}"),
    "minutes.whole": ("{value} 分钟", "{value} min"),
    "minutes.fraction": ("{value:.1f} 分钟", "{value:.1f} min"),
    "notification.title": ("该休息眼睛了", "Time to Rest Your Eyes"),
    "notification.body": (
        "点击“确定休息”开始休息计时。",
        "Click “Start Break” to begin the rest countdown.",
    ),
    "notification.action": ("确定休息", "Start Break"),
    "notification.checking": ("通知权限检查中", "Checking notification permission..."),
    "notification.authorized": ("通知已开启", "Notifications enabled"),
    "notification.denied": (
        "通知被关闭，请在系统设置中开启",
        "Notifications disabled. Enable them in System Settings.",
    ),
    "notification.not_determined": ("通知权限未确认", "Notification permission not determined"),
    "notification.unknown": ("通知状态未知", "Unknown notification status"),
    "notification.unavailable": ("通知不可用", "Notifications unavailable"),
    "notification.send_failed": ("通知发送失败：{error}", "Failed to send notification: {error}"),
    "notification.auth_failed": ("通知授权失败：{error}", "Notification authorization failed: {error}"),
}


def preferred_language() -> AppLanguage:
    """Chinese when the system UI language is Chinese, English otherwise."""
    languages = QLocale.system().uiLanguages()
    first = languages[0] if languages else ""
    return AppLanguage.ZH_HANS if first.lower().startswith("zh") else AppLanguage.EN


def translate(key: str, language: AppLanguage, **kwargs: object) -> str:
    zh, en = MESSAGES[key]
    template = zh if language == AppLanguage.ZH_HANS else en
    return template.format(**kwargs) if kwargs else template


def format_seconds(seconds: int) -> str:
    safe = max(0, int(seconds))
    return f"{safe // 60:02d}:{safe % 60:02d}"


def format_minutes(value: float, language: AppLanguage) -> str:
    if abs(round(value) - value) < 0.01:
        return translate("minutes.whole", language, value=int(round(value)))
    return translate("minutes.fraction", language, value=value)
