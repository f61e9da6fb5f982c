from typing import Any, Dict, List, Optional

import pytest

from hotspot.config import HotspotConfig
from hotspot.models import (
    ConnectionProfile,
    OperationResult,
    RadioHandle,
    RadioState,
    TetheringState,
)

RADIO_CALLS = {"request_access", "enumerate_radios", "set_radio_state", "restart_adapter"}


class FakePlatform:
    """
    In-memory Windows: starting the hotspot turns the WiFi radio On, stopping
    it leaves the radio in `radio_after_stop`.
    """

    def __init__(
        self,
        hotspot: str = "Off",
        radio: Optional[str] = "Off",
        profile: Optional[str] = "Home",
        profile_after: int = 0,
        start_status: str = "Success",
        stop_status: str = "Success",
        radio_after_stop: str = "Off",
        access: str = "Allowed",
    ) -> None:
        self.hotspot = TetheringState.parse(hotspot)
        self.radio_state = RadioState.parse(radio) if radio else None
        self.profile_name = profile
        self.profile_after = profile_after
        self.start_status = start_status
        self.stop_status = stop_status
        self.radio_after_stop = RadioState.parse(radio_after_stop)
        self.access = access
        self.calls: List[str] = []
        self.radio_at_start: List[Optional[RadioState]] = []
        self.radio_targets: List[RadioState] = []
        self.adapters: List[Dict[str, Any]] = [
            {"Name": "Ethernet", "InterfaceDescription": "Realtek PCIe GbE", "Status": "Up"},
            {"Name": "Wi-Fi", "InterfaceDescription": "Intel(R) Wi-Fi 6 AX201", "Status": "Up"},
        ]

    def count(self, name: str) -> int:
        return self.calls.count(name)

    def radio_calls(self) -> List[str]:
        return [c for c in self.calls if c in RADIO_CALLS]

    def get_internet_connection_profile(self) -> Optional[ConnectionProfile]:
        self.calls.append("get_profile")
        if self.profile_name is None:
            return None
        if self.profile_after > 0:
            self.profile_after -= 1
            return None
        return ConnectionProfile(self.profile_name)

    def tethering_state(self, handle) -> TetheringState:
        self.calls.append("tethering_state")
        return self.hotspot

    def start_tethering(self, handle) -> OperationResult:
        self.calls.append("start")
        self.radio_at_start.append(self.radio_state)
        if self.start_status == "Success":
            self.hotspot = TetheringState.ON
            self.radio_state = RadioState.ON
        return OperationResult(self.start_status)

    def stop_tethering(self, handle) -> OperationResult:
        self.calls.append("stop")
        if self.stop_status == "Success":
            self.hotspot = TetheringState.OFF
            self.radio_state = self.radio_after_stop
        return OperationResult(self.stop_status)

    def request_radio_access(self) -> str:
        self.calls.append("request_access")
        return self.access

    def enumerate_radios(self) -> List[RadioHandle]:
        self.calls.append("enumerate_radios")
        radios = [RadioHandle("Bluetooth", "Bluetooth", RadioState.ON)]
        if self.radio_state is not None:
            radios.append(RadioHandle("Wi-Fi", "WiFi", self.radio_state))
        return radios

    def set_radio_state(self, handle: RadioHandle, state: RadioState) -> str:
        self.calls.append("set_radio_state")
        self.radio_targets.append(state)
        self.radio_state = state
        return "Allowed"

    def restart_adapter(self, adapter) -> bool:
        self.calls.append("restart_adapter")
        return True

    def list_adapters(self) -> List[Dict[str, Any]]:
        return list(self.adapters)


class FakeClock:
    def __init__(self) -> None:
        self.sleeps: List[float] = []

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)

    @property
    def elapsed(self) -> float:
        return sum(self.sleeps)


class RecordingNotifier:
    def __init__(self) -> None:
        self.messages: List[tuple] = []

    def notify(self, title: str, message: str) -> None:
        self.messages.append((title, message))


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def config():
    return HotspotConfig(log_file=None)


@pytest.fixture
def make_platform():
    return FakePlatform
