import pytest

from hotspot.errors import AsyncFailure, RadioAccessDenied, RadioNotFound
from hotspot.models import RadioHandle, RadioState
from hotspot.radio import RadioController


def test_find_wifi_radio_skips_other_kinds(make_platform):
    platform = make_platform(radio="On")

    radio = RadioController(platform).find_wifi_radio()

    assert radio == RadioHandle("Wi-Fi", "WiFi", RadioState.ON)
    assert platform.calls[:2] == ["request_access", "enumerate_radios"]


def test_first_wifi_radio_wins(make_platform, monkeypatch):
    platform = make_platform()
    radios = [
        RadioHandle("Bluetooth", "Bluetooth", RadioState.ON),
        RadioHandle("Wi-Fi", "WiFi", RadioState.OFF),
        RadioHandle("Wi-Fi 2", "WiFi", RadioState.ON),
    ]
    monkeypatch.setattr(platform, "enumerate_radios", lambda: radios)

    assert RadioController(platform).find_wifi_radio().name == "Wi-Fi"


def test_access_must_be_allowed(make_platform):
    platform = make_platform(access="DeniedByUser")

    with pytest.raises(RadioAccessDenied) as exc:
        RadioController(platform).find_wifi_radio()

    assert exc.value.status == "DeniedByUser"
    assert platform.count("enumerate_radios") == 0


def test_no_wifi_radio(make_platform):
    with pytest.raises(RadioNotFound):
        RadioController(make_platform(radio=None)).find_wifi_radio()


def test_set_state_reports_success(make_platform):
    platform = make_platform(radio="On")
    radios = RadioController(platform)

    assert radios.set_state(radios.find_wifi_radio(), RadioState.OFF) is True
    assert platform.radio_state is RadioState.OFF


def test_set_state_does_not_raise(make_platform, monkeypatch):
    platform = make_platform(radio="On")
    radios = RadioController(platform)
    handle = radios.find_wifi_radio()

    monkeypatch.setattr(platform, "set_radio_state", lambda h, s: "DeniedBySystem")
    assert radios.set_state(handle, RadioState.OFF) is False

    def boom(h, s):
        raise AsyncFailure("SetStateAsync faulted")

    monkeypatch.setattr(platform, "set_radio_state", boom)
    assert radios.set_state(handle, RadioState.OFF) is False


def test_refresh_reads_current_state(make_platform):
    platform = make_platform(radio="On")
    radios = RadioController(platform)
    handle = radios.find_wifi_radio()

    platform.radio_state = RadioState.OFF

    assert handle.state is RadioState.ON
    assert radios.refresh(handle).state is RadioState.OFF


def test_refresh_falls_back_to_same_kind(make_platform, monkeypatch):
    platform = make_platform()
    monkeypatch.setattr(
        platform, "enumerate_radios", lambda: [RadioHandle("Wi-Fi (renamed)", "WiFi", RadioState.OFF)]
    )

    refreshed = RadioController(platform).refresh(RadioHandle("Wi-Fi", "WiFi", RadioState.ON))

    assert refreshed.name == "Wi-Fi (renamed)"


def test_refresh_raises_when_radio_is_gone(make_platform):
    platform = make_platform(radio=None)

    with pytest.raises(RadioNotFound):
        RadioController(platform).refresh(RadioHandle("Wi-Fi", "WiFi", RadioState.ON))
