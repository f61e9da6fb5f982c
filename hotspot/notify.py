from __future__ import annotations
import logging

from plyer import notification

log = logging.getLogger(__name__)

APP_NAME = "Hotspot Toggle"


class ToastNotifier:
    """Desktop toast through plyer. Failures are logged and otherwise ignored."""

    def __init__(self, app_name: str = APP_NAME, timeout: int = 5) -> None:
        self.app_name = app_name
        self.timeout = timeout

    def notify(self, title: str, message: str) -> None:
        log.info("%s: %s", title, message)
        try:
            notification.notify(
                title=title,
                message=message,
                app_name=self.app_name,
                timeout=self.timeout,
            )
        except Exception as e:
            log.debug("Toast notification failed: %s", e)
