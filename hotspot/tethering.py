from __future__ import annotations
from typing import Optional

from .errors import NoProfileFound, TetheringOperationFailed
from .models import ConnectionProfile, OperationResult, TetheringHandle, TetheringState
from .platform import HotspotPlatform


class TetheringController:
    def __init__(self, platform: HotspotPlatform) -> None:
        self.platform = platform

    def from_profile(self, profile: Optional[ConnectionProfile]) -> TetheringHandle:
        if profile is None:
            raise NoProfileFound()
        return TetheringHandle(profile=profile)

    def operational_state(self, handle: TetheringHandle) -> TetheringState:
        return self.platform.tethering_state(handle)

    def start(self, handle: TetheringHandle) -> OperationResult:
        return self.platform.start_tethering(handle)

    def stop(self, handle: TetheringHandle) -> OperationResult:
        return self.platform.stop_tethering(handle)

    @staticmethod
    def require_success(result: OperationResult, action: str) -> OperationResult:
        if not result.ok:
            raise TetheringOperationFailed(action, result.status, result.message or None)
        return result
