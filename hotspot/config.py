from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional
import os

import yaml

from .errors import ConfigError
from .models import RetryBudget

DEFAULT_CONFIG_PATH = Path("config/hotspot.yaml")
DEFAULT_RUNNER_URL = "http://127.0.0.1:8766"

RADIO_CYCLE_POLICIES = ("tethering", "power", "none")


@dataclass(frozen=True)
class PowerCycleConfig:
    off_delay: float = 2.0
    on_settle: float = 6.0
    restart_adapter: bool = False
    restart_settle: float = 5.0


@dataclass(frozen=True)
class HotspotConfig:
    """
    Everything a toggle run can be tuned with. Built once at startup and
    handed to whoever needs it; nothing reads settings from globals.
    """
    profile_wait: RetryBudget = field(default_factory=RetryBudget)
    radio_cycle: str = "tethering"
    settle_delay: float = 2.0
    power_cycle: PowerCycleConfig = field(default_factory=PowerCycleConfig)
    startup_delay: float = 30.0
    notifications: bool = True
    require_elevation: bool = True
    adapter_file: Path = Path("config/adapter.json")
    log_file: Optional[Path] = Path("logs/hotspot.log")
    audit_file: Path = Path("logs/audit.log")
    runner_url: str = DEFAULT_RUNNER_URL
    powershell_timeout: Optional[float] = None

    @classmethod
    def load(cls, path: str | Path | None = None) -> "HotspotConfig":
        if path is None:
            path = os.environ.get("HOTSPOT_CONFIG") or DEFAULT_CONFIG_PATH
        path = Path(path)
        if not path.exists():
            return cls()
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
        except yaml.YAMLError as e:
            raise ConfigError(f"Could not parse {path}: {e}") from e
        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HotspotConfig":
        if not isinstance(data, dict):
            raise ConfigError("Config root must be a mapping")

        wait = data.get("profile_wait", {}) or {}
        budget = RetryBudget(
            max_attempts=_as_int(wait.get("max_attempts", 12), "profile_wait.max_attempts", minimum=1),
            interval=_as_float(wait.get("interval_seconds", 5.0), "profile_wait.interval_seconds"),
        )

        pc = data.get("power_cycle", {}) or {}
        power = PowerCycleConfig(
            off_delay=_as_float(pc.get("off_delay_seconds", 2.0), "power_cycle.off_delay_seconds"),
            on_settle=_as_float(pc.get("on_settle_seconds", 6.0), "power_cycle.on_settle_seconds"),
            restart_adapter=bool(pc.get("restart_adapter", False)),
            restart_settle=_as_float(pc.get("restart_settle_seconds", 5.0), "power_cycle.restart_settle_seconds"),
        )

        policy = str(data.get("radio_cycle", "tethering")).strip().lower()
        if policy not in RADIO_CYCLE_POLICIES:
            raise ConfigError(
                f"radio_cycle must be one of {', '.join(RADIO_CYCLE_POLICIES)} (got {policy!r})"
            )

        log_file = data.get("log_file", "logs/hotspot.log")
        timeout = data.get("powershell_timeout_seconds")

        return cls(
            profile_wait=budget,
            radio_cycle=policy,
            settle_delay=_as_float(data.get("settle_delay_seconds", 2.0), "settle_delay_seconds"),
            power_cycle=power,
            startup_delay=_as_float(data.get("startup_delay_seconds", 30.0), "startup_delay_seconds"),
            notifications=bool(data.get("notifications", True)),
            require_elevation=bool(data.get("require_elevation", True)),
            adapter_file=Path(data.get("adapter_file", "config/adapter.json")),
            log_file=Path(log_file) if log_file else None,
            audit_file=Path(data.get("audit_file", "logs/audit.log")),
            runner_url=str(data.get("runner_url", DEFAULT_RUNNER_URL)).rstrip("/"),
            powershell_timeout=None if timeout is None else _as_float(timeout, "powershell_timeout_seconds"),
        )


def _as_float(value: Any, key: str) -> float:
    try:
        v = float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{key} must be a number (got {value!r})")
    if v < 0:
        raise ConfigError(f"{key} must not be negative")
    return v


def _as_int(value: Any, key: str, minimum: int = 0) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"{key} must be an integer (got {value!r})")
    try:
        v = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{key} must be an integer (got {value!r})")
    if v < minimum:
        raise ConfigError(f"{key} must be at least {minimum}")
    return v
