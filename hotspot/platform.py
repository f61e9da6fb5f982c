from __future__ import annotations
from typing import Any, Dict, List, Optional, Protocol

from .models import (
    ConnectionProfile,
    OperationResult,
    RadioHandle,
    RadioState,
    TetheringHandle,
    TetheringState,
    WifiAdapter,
)


class HotspotPlatform(Protocol):
    """
    Native primitives the toggle runs on.

    `hotspot_runner.winrt.WinRTPlatform` is the real implementation; tests
    supply an in-memory one.
    """

    def get_internet_connection_profile(self) -> Optional[ConnectionProfile]: ...

    def tethering_state(self, handle: TetheringHandle) -> TetheringState: ...

    def start_tethering(self, handle: TetheringHandle) -> OperationResult: ...

    def stop_tethering(self, handle: TetheringHandle) -> OperationResult: ...

    def request_radio_access(self) -> str: ...

    def enumerate_radios(self) -> List[RadioHandle]: ...

    def set_radio_state(self, handle: RadioHandle, state: RadioState) -> str: ...

    def restart_adapter(self, adapter: WifiAdapter) -> bool: ...

    def list_adapters(self) -> List[Dict[str, Any]]: ...
