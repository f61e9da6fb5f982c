from __future__ import annotations
import logging

from .errors import AsyncFailure, RadioAccessDenied, RadioNotFound
from .models import RadioHandle, RadioState
from .platform import HotspotPlatform

log = logging.getLogger(__name__)

WIFI_KIND = "WiFi"


class RadioController:
    def __init__(self, platform: HotspotPlatform) -> None:
        self.platform = platform

    def find_wifi_radio(self) -> RadioHandle:
        """
        Return the first WiFi radio the platform enumerates.

        Radio access has to be granted first; any other WiFi radios are ignored.
        """
        status = self.platform.request_radio_access()
        if status.lower() != "allowed":
            raise RadioAccessDenied(status)

        for radio in self.platform.enumerate_radios():
            if radio.kind.lower() == WIFI_KIND.lower():
                return radio
        raise RadioNotFound("No WiFi radio found")

    def set_state(self, handle: RadioHandle, target: RadioState) -> bool:
        try:
            status = self.platform.set_radio_state(handle, target)
        except AsyncFailure as e:
            log.warning("Setting radio %s to %s failed: %s", handle.name, target.value, e)
            return False
        if status.lower() != "allowed":
            log.warning("Setting radio %s to %s returned %s", handle.name, target.value, status)
            return False
        return True

    def refresh(self, handle: RadioHandle) -> RadioHandle:
        radios = [r for r in self.platform.enumerate_radios() if r.kind.lower() == handle.kind.lower()]
        for radio in radios:
            if radio.name == handle.name:
                return radio
        # Drivers may rename the radio after a reset; same kind is good enough.
        if radios:
            return radios[0]
        raise RadioNotFound(f"Radio {handle.name!r} disappeared")
