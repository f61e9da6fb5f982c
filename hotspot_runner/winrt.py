from __future__ import annotations
from typing import Any, Dict, List, Optional
import logging

from hotspot.errors import AsyncFailure
from hotspot.models import (
    ConnectionProfile,
    OperationResult,
    RadioHandle,
    RadioState,
    TetheringHandle,
    TetheringState,
    WifiAdapter,
)

from .powershell import PowerShellBridge, ps_quote

log = logging.getLogger(__name__)

_LOAD_CONNECTIVITY = r"""
  $null = [Windows.Networking.Connectivity.NetworkInformation, Windows.Networking.Connectivity, ContentType=WindowsRuntime]
"""

_LOAD_TETHERING = _LOAD_CONNECTIVITY + r"""
  $null = [Windows.Networking.NetworkOperators.NetworkOperatorTetheringManager, Windows.Networking.NetworkOperators, ContentType=WindowsRuntime]
  $null = [Windows.Networking.NetworkOperators.NetworkOperatorTetheringOperationResult, Windows.Networking.NetworkOperators, ContentType=WindowsRuntime]
"""

_LOAD_RADIOS = r"""
  $null = [Windows.Devices.Radios.Radio, Windows.Devices.Radios, ContentType=WindowsRuntime]
"""


def _manager_ps(profile_name: str) -> str:
    # Bind to the handle's profile; fall back to the current internet profile
    # when it was renamed or re-created in the meantime.
    return _LOAD_TETHERING + rf"""
  $connectionProfile = [Windows.Networking.Connectivity.NetworkInformation]::GetConnectionProfiles() |
    Where-Object {{ $_.ProfileName -eq {ps_quote(profile_name)} }} | Select-Object -First 1
  if (-not $connectionProfile) {{
    $connectionProfile = [Windows.Networking.Connectivity.NetworkInformation]::GetInternetConnectionProfile()
  }}
  if (-not $connectionProfile) {{ throw "No internet connection profile" }}
  $manager = [Windows.Networking.NetworkOperators.NetworkOperatorTetheringManager]::CreateFromConnectionProfile($connectionProfile)
"""


def _find_radio_ps(handle: RadioHandle) -> str:
    return _LOAD_RADIOS + rf"""
  $radios = Await-Operation ([Windows.Devices.Radios.Radio]::GetRadiosAsync()) ([System.Collections.Generic.IReadOnlyList[Windows.Devices.Radios.Radio]])
  $radio = $radios | Where-Object {{ $_.Kind.ToString() -eq {ps_quote(handle.kind)} -and $_.Name -eq {ps_quote(handle.name)} }} | Select-Object -First 1
  if (-not $radio) {{
    $radio = $radios | Where-Object {{ $_.Kind.ToString() -eq {ps_quote(handle.kind)} }} | Select-Object -First 1
  }}
  if (-not $radio) {{ throw ("Radio not found: " + {ps_quote(handle.name)}) }}
"""


class WinRTPlatform:
    """Windows implementation of the hotspot platform primitives."""

    def __init__(self, bridge: Optional[PowerShellBridge] = None) -> None:
        self.bridge = bridge or PowerShellBridge()

    # -------------------------
    # Connection profile
    # -------------------------

    def get_internet_connection_profile(self) -> Optional[ConnectionProfile]:
        data = self.bridge.run(_LOAD_CONNECTIVITY + r"""
  $p = [Windows.Networking.Connectivity.NetworkInformation]::GetInternetConnectionProfile()
  if ($p) { $result = @{ present = $true; name = $p.ProfileName } }
  else { $result = @{ present = $false } }
""")
        if not data.get("present"):
            return None
        return ConnectionProfile(name=str(data.get("name") or ""))

    # -------------------------
    # Tethering
    # -------------------------

    def tethering_state(self, handle: TetheringHandle) -> TetheringState:
        data = self.bridge.run(_manager_ps(handle.profile.name) + r"""
  $result = @{ state = $manager.TetheringOperationalState.ToString() }
""")
        return TetheringState.parse(data.get("state"))

    def start_tethering(self, handle: TetheringHandle) -> OperationResult:
        return self._tethering_op(handle, "StartTetheringAsync")

    def stop_tethering(self, handle: TetheringHandle) -> OperationResult:
        return self._tethering_op(handle, "StopTetheringAsync")

    def _tethering_op(self, handle: TetheringHandle, method: str) -> OperationResult:
        data = self.bridge.run(_manager_ps(handle.profile.name) + rf"""
  $r = Await-Operation ($manager.{method}()) ([Windows.Networking.NetworkOperators.NetworkOperatorTetheringOperationResult])
  $result = @{{ status = $r.Status.ToString(); message = $r.AdditionalErrorMessage }}
""")
        return OperationResult(
            status=str(data.get("status") or "Unknown"),
            message=str(data.get("message") or ""),
        )

    # -------------------------
    # Radios
    # -------------------------

    def request_radio_access(self) -> str:
        data = self.bridge.run(_LOAD_RADIOS + r"""
  $s = Await-Operation ([Windows.Devices.Radios.Radio]::RequestAccessAsync()) ([Windows.Devices.Radios.RadioAccessStatus])
  $result = @{ status = $s.ToString() }
""")
        return str(data.get("status") or "Unspecified")

    def enumerate_radios(self) -> List[RadioHandle]:
        data = self.bridge.run(_LOAD_RADIOS + r"""
  $radios = Await-Operation ([Windows.Devices.Radios.Radio]::GetRadiosAsync()) ([System.Collections.Generic.IReadOnlyList[Windows.Devices.Radios.Radio]])
  $result = @{ radios = @($radios | ForEach-Object { @{ name = $_.Name; kind = $_.Kind.ToString(); state = $_.State.ToString() } }) }
""")
        radios = data.get("radios") or []
        if isinstance(radios, dict):
            radios = [radios]
        return [
            RadioHandle(
                name=str(r.get("name") or ""),
                kind=str(r.get("kind") or ""),
                state=RadioState.parse(r.get("state")),
            )
            for r in radios
            if isinstance(r, dict)
        ]

    def set_radio_state(self, handle: RadioHandle, state: RadioState) -> str:
        data = self.bridge.run(_find_radio_ps(handle) + rf"""
  $s = Await-Operation ($radio.SetStateAsync([Windows.Devices.Radios.RadioState]::{state.value})) ([Windows.Devices.Radios.RadioAccessStatus])
  $result = @{{ status = $s.ToString() }}
""")
        return str(data.get("status") or "Unspecified")

    # -------------------------
    # Adapters (NetAdapter cmdlets)
    # -------------------------

    def restart_adapter(self, adapter: WifiAdapter) -> bool:
        try:
            data = self.bridge.run(rf"""
  Restart-NetAdapter -Name {ps_quote(adapter.name)} -Confirm:$false -ErrorAction Stop
  $result = @{{ ok = $true }}
""")
        except AsyncFailure as e:
            log.warning("Restart-NetAdapter failed for %s: %s", adapter.name, e)
            return False
        return bool(data.get("ok"))

    def list_adapters(self) -> List[Dict[str, Any]]:
        data = self.bridge.run(r"""
  $result = @{ adapters = @(Get-NetAdapter | Select-Object Name, InterfaceDescription, Status, IfIndex) }
""")
        adapters = data.get("adapters") or []
        if isinstance(adapters, dict):
            return [adapters]
        return [a for a in adapters if isinstance(a, dict)]
