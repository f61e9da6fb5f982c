from __future__ import annotations
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Protocol
import logging
import time

from .config import HotspotConfig
from .errors import HotspotError, RadioNotFound
from .models import TetheringHandle, TetheringState, WifiAdapter
from .platform import HotspotPlatform
from .profile_waiter import ConnectionProfileWaiter
from .radio import RadioController
from .radio_cycle import build_radio_cycle
from .tethering import TetheringController


class Notifier(Protocol):
    def notify(self, title: str, message: str) -> None: ...


class ToggleState(Enum):
    CHECKING_STATE = "CheckingState"
    STOPPING_HOTSPOT = "StoppingHotspot"
    WAITING_FOR_PROFILE = "WaitingForProfile"
    CYCLING_RADIO = "CyclingRadio"
    STARTING_HOTSPOT = "StartingHotspot"
    DONE = "Done"
    FAILED = "Failed"


NOTIFY_TITLE = "Mobile Hotspot"


class HotspotOrchestrator:
    """
    Turns the mobile hotspot off when it is on, and on when it is off.

    Enabling waits for an internet connection profile, runs the configured
    radio cycle and then starts tethering. Disabling just stops tethering.
    Every failure is logged and reported as a False return; nothing is raised
    to the caller.
    """

    def __init__(
        self,
        platform: HotspotPlatform,
        config: Optional[HotspotConfig] = None,
        notifier: Optional[Notifier] = None,
        logger: Optional[logging.Logger] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.platform = platform
        self.config = config or HotspotConfig()
        self.notifier = notifier
        self.log = logger or logging.getLogger(__name__)
        self.radios = RadioController(platform)
        self.tethering = TetheringController(platform)
        self.waiter = ConnectionProfileWaiter(platform, self.config.profile_wait, sleep)
        self.radio_cycle = build_radio_cycle(self.config, platform, self.radios, self.tethering, sleep)
        self.history: List[ToggleState] = []

    def toggle_hotspot(self, adapter: WifiAdapter) -> bool:
        self.history = []
        try:
            ok = self._toggle(adapter)
        except HotspotError as e:
            self._log(logging.ERROR, "Hotspot toggle failed: %s", e)
            ok = False
        except Exception as e:
            self._log(logging.ERROR, "Unexpected error while toggling hotspot: %r", e, exc_info=True)
            ok = False
        self._enter(ToggleState.DONE if ok else ToggleState.FAILED)
        return ok

    def _toggle(self, adapter: WifiAdapter) -> bool:
        self._enter(ToggleState.CHECKING_STATE)
        try:
            profile = self.waiter.wait_for_internet_profile()
        finally:
            if self.waiter.attempts > 1:
                self._enter(ToggleState.WAITING_FOR_PROFILE)

        handle = self.tethering.from_profile(profile)
        state = self.tethering.operational_state(handle)
        self._log(
            logging.INFO,
            "Hotspot is %s (profile %r, adapter %r)", state.value, profile.name, adapter.name,
        )

        if state is TetheringState.ON:
            return self._stop(handle)
        if state is not TetheringState.OFF:
            self._log(logging.WARNING, "Hotspot is %s, leaving it alone", state.value)
            return False

        self._enter(ToggleState.CYCLING_RADIO)
        self._log(logging.INFO, "Radio cycle policy: %s", self.radio_cycle.name)
        self.radio_cycle.run(adapter, handle)

        return self._start(handle)

    def _stop(self, handle: TetheringHandle) -> bool:
        self._enter(ToggleState.STOPPING_HOTSPOT)
        self.tethering.require_success(self.tethering.stop(handle), "stop")
        self._log(logging.INFO, "Hotspot disabled")
        self._notify("Hotspot disabled")
        return True

    def _start(self, handle: TetheringHandle) -> bool:
        self._enter(ToggleState.STARTING_HOTSPOT)
        self.tethering.require_success(self.tethering.start(handle), "start")
        self._log(logging.INFO, "Hotspot enabled")
        self._notify("Hotspot enabled")
        return True

    def current_state(self) -> Dict[str, Any]:
        """Read-only snapshot: profile, hotspot state and WiFi radio."""
        profile = self.platform.get_internet_connection_profile()
        out: Dict[str, Any] = {
            "profile": profile.name if profile else None,
            "hotspot": None,
            "radio": None,
        }
        if profile is not None:
            handle = self.tethering.from_profile(profile)
            out["hotspot"] = self.tethering.operational_state(handle).value
        try:
            radio = self.radios.find_wifi_radio()
            out["radio"] = {"name": radio.name, "state": radio.state.value}
        except RadioNotFound as e:
            out["radio_error"] = str(e)
        return out

    # -------------------------
    # Collaborators
    # -------------------------

    def _enter(self, state: ToggleState) -> None:
        self.history.append(state)
        self._log(logging.DEBUG, "-> %s", state.value)

    def _log(self, level: int, msg: str, *args: Any, exc_info: bool = False) -> None:
        try:
            self.log.log(level, msg, *args, exc_info=exc_info)
        except Exception:
            pass

    def _notify(self, message: str) -> None:
        if self.notifier is None or not self.config.notifications:
            return
        try:
            self.notifier.notify(NOTIFY_TITLE, message)
        except Exception as e:
            self._log(logging.DEBUG, "Notification failed: %s", e)
