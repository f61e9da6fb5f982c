from __future__ import annotations
from typing import Callable, Protocol
import logging
import time

from .config import HotspotConfig, PowerCycleConfig
from .errors import RadioCycleVerificationFailed
from .models import RadioState, TetheringHandle, WifiAdapter
from .platform import HotspotPlatform
from .radio import RadioController
from .tethering import TetheringController

log = logging.getLogger(__name__)


class RadioCycle(Protocol):
    name: str

    def run(self, adapter: WifiAdapter, handle: TetheringHandle) -> None: ...


class TetheringRadioCycle:
    """
    Default policy. When the WiFi radio reports On, Windows often refuses to
    start tethering on it. Starting and stopping the hotspot once leaves the
    radio enabled but Off, which is the state StartTetheringAsync expects.

    A radio that is not On is left alone. The cycle runs once; if the radio is
    not Off afterwards the toggle is aborted.
    """

    name = "tethering"

    def __init__(
        self,
        radios: RadioController,
        tethering: TetheringController,
        settle_delay: float = 2.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.radios = radios
        self.tethering = tethering
        self.settle_delay = settle_delay
        self.sleep = sleep

    def run(self, adapter: WifiAdapter, handle: TetheringHandle) -> None:
        radio = self.radios.find_wifi_radio()
        if radio.state is not RadioState.ON:
            log.info("WiFi radio %r is %s, no cycle needed", radio.name, radio.state.value)
            return

        log.info("WiFi radio %r is On, forcing it Off with a hotspot start/stop", radio.name)
        started = self.tethering.start(handle)
        if not started.ok:
            log.warning("Hotspot start during radio cycle returned %s", started.status)
        self.sleep(self.settle_delay)

        stopped = self.tethering.stop(handle)
        if not stopped.ok:
            log.warning("Hotspot stop during radio cycle returned %s", stopped.status)
        self.sleep(self.settle_delay)

        radio = self.radios.refresh(radio)
        if radio.state is not RadioState.OFF:
            raise RadioCycleVerificationFailed(radio.state.value)
        log.info("WiFi radio %r is Off after the cycle", radio.name)


class PowerRadioCycle:
    """Switch the WiFi radio Off and On again, then optionally restart the adapter."""

    name = "power"

    def __init__(
        self,
        radios: RadioController,
        platform: HotspotPlatform,
        config: PowerCycleConfig,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.radios = radios
        self.platform = platform
        self.config = config
        self.sleep = sleep

    def run(self, adapter: WifiAdapter, handle: TetheringHandle) -> None:
        radio = self.radios.find_wifi_radio()
        log.info("Power cycling WiFi radio %r (currently %s)", radio.name, radio.state.value)

        if not self.radios.set_state(radio, RadioState.OFF):
            log.warning("Could not switch WiFi radio %r Off", radio.name)
        self.sleep(self.config.off_delay)

        radio = self.radios.refresh(radio)
        if not self.radios.set_state(radio, RadioState.ON):
            log.warning("Could not switch WiFi radio %r On", radio.name)
        self.sleep(self.config.on_settle)

        if self.config.restart_adapter:
            log.info("Restarting adapter %r", adapter.name)
            if self.platform.restart_adapter(adapter):
                self.sleep(self.config.restart_settle)
            else:
                log.warning("Adapter %r restart failed, continuing", adapter.name)


class NoRadioCycle:
    name = "none"

    def run(self, adapter: WifiAdapter, handle: TetheringHandle) -> None:
        log.debug("Radio cycling disabled")


def build_radio_cycle(
    config: HotspotConfig,
    platform: HotspotPlatform,
    radios: RadioController,
    tethering: TetheringController,
    sleep: Callable[[float], None] = time.sleep,
) -> RadioCycle:
    if config.radio_cycle == "power":
        return PowerRadioCycle(radios, platform, config.power_cycle, sleep)
    if config.radio_cycle == "none":
        return NoRadioCycle()
    return TetheringRadioCycle(radios, tethering, config.settle_delay, sleep)
