from __future__ import annotations
from typing import Optional


class HotspotError(Exception):
    """Base class for every failure the toggle knows how to report."""


class ConfigError(HotspotError):
    pass


class NoProfileFound(HotspotError):
    def __init__(self, attempts: int = 0) -> None:
        self.attempts = attempts
        super().__init__(f"No internet connection profile after {attempts} attempt(s)")


class RadioNotFound(HotspotError):
    pass


class RadioAccessDenied(RadioNotFound):
    def __init__(self, status: str) -> None:
        self.status = status
        super().__init__(f"Radio access was not granted (status: {status})")


class RadioCycleVerificationFailed(HotspotError):
    def __init__(self, state: object) -> None:
        self.state = state
        super().__init__(f"WiFi radio is still {state} after the radio cycle; expected Off")


class TetheringOperationFailed(HotspotError):
    def __init__(self, action: str, status: str, message: Optional[str] = None) -> None:
        self.action = action
        self.status = status
        text = f"Tethering {action} failed with status {status}"
        if message:
            text += f": {message}"
        super().__init__(text)


class AsyncFailure(HotspotError):
    pass


class AsyncBridgeUnavailable(AsyncFailure):
    pass


class AdapterNotFound(HotspotError):
    pass
