from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class RadioState(Enum):
    ON = "On"
    OFF = "Off"
    DISABLED = "Disabled"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: Optional[str]) -> "RadioState":
        for s in cls:
            if s.value.lower() == (value or "").strip().lower():
                return s
        return cls.UNKNOWN


class TetheringState(Enum):
    ON = "On"
    OFF = "Off"
    IN_TRANSITION = "InTransition"
    UNKNOWN = "Unknown"

    @classmethod
    def parse(cls, value: Optional[str]) -> "TetheringState":
        for s in cls:
            if s.value.lower() == (value or "").strip().lower():
                return s
        return cls.UNKNOWN


@dataclass(frozen=True)
class WifiAdapter:
    """Adapter identity picked by the adapter resolver."""
    name: str
    description: str = ""


@dataclass(frozen=True)
class ConnectionProfile:
    name: str


@dataclass(frozen=True)
class RadioHandle:
    """
    Snapshot of a platform radio.

    Handles are cheap to re-fetch and go stale as soon as anything touches the
    radio, so callers refresh them instead of holding on to them.
    """
    name: str
    kind: str
    state: RadioState = RadioState.UNKNOWN


@dataclass(frozen=True)
class TetheringHandle:
    profile: ConnectionProfile


@dataclass(frozen=True)
class OperationResult:
    status: str
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status.lower() == "success"


@dataclass(frozen=True)
class RetryBudget:
    max_attempts: int = 12
    interval: float = 5.0
