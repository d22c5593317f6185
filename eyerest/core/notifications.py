from __future__ import annotations

"""System tray notifier used when no full-screen prompt is shown."""

import logging

from PyQt6.QtWidgets import QSystemTrayIcon

from eyerest.core.ports import NotificationError, NotificationStatus, Notifier


logger = logging.getLogger(__name__)

MESSAGE_TIMEOUT_MS = 10_000


class TrayNotifier(Notifier):
    """Posts rest reminders as tray balloon messages.

    Clicking a message counts as its single action; the owner connects
    ``messageClicked`` on the tray icon.
    """

    def __init__(self, tray_icon: QSystemTrayIcon) -> None:
        self._tray_icon = tray_icon
        self._has_pending_message = False

    def send(self, title: str, body: str, action_label: str) -> None:
        if self.authorization_status() != NotificationStatus.AUTHORIZED:
            raise NotificationError("system tray messages are not supported on this desktop")
        message = f"{body}\n({action_label})" if action_label else body
        self._tray_icon.showMessage(title, message, QSystemTrayIcon.MessageIcon.Information, MESSAGE_TIMEOUT_MS)
        self._has_pending_message = True

    def clear_all(self) -> None:
        if not self._has_pending_message:
            return
        # An empty message replaces the balloon and expires immediately.
        self._tray_icon.showMessage("", "", QSystemTrayIcon.MessageIcon.NoIcon, 1)
        self._has_pending_message = False

    def authorization_status(self) -> NotificationStatus:
        if not QSystemTrayIcon.isSystemTrayAvailable():
            return NotificationStatus.DENIED
        if not QSystemTrayIcon.supportsMessages():
            return NotificationStatus.DENIED
        return NotificationStatus.AUTHORIZED

    def request_authorization(self) -> None:
        # Desktop trays have no permission prompt; just record what is available.
        logger.info("Tray notification status: %s", self.authorization_status().value)
