# tests/test_mac_ping.py

import errno
import struct

import pytest

import discovery.mac_ping as mac_ping_module
from discovery.mac_ping import mac_ping, probe_identifier
from protocol.checksum import checksum_is_valid
from utils.errors import ChannelError, PreconditionError, ReplyTimeoutError


def test_mac_ping_returns_mac(fake_channels):
    res = mac_ping("192.0.2.10", timeout_ms=500, identifier=4321)
    entry = res["192.0.2.10"]
    assert entry["mac"] == "aa:bb:cc:dd:ee:ff"
    assert entry["method"] == "ICMP"
    assert entry["id"] == 4321 and entry["seq"] == 1
    assert entry["rtt"] >= 0
    assert "vendor" not in entry
    assert fake_channels.icmp.closed and fake_channels.capture.closed


def test_mac_ping_sends_64_byte_echo_request(fake_channels):
    mac_ping("192.0.2.10", timeout_ms=500, identifier=4321)
    (frame, addr), = fake_channels.sent
    assert addr == ("192.0.2.10", 0)
    assert len(frame) == 64
    assert frame[:2] == b"\x08\x00"
    assert struct.unpack_from("!HH", frame, 4) == (4321, 1)
    assert checksum_is_valid(frame)


def test_mac_ping_default_identifier_is_pid(fake_channels, monkeypatch):
    monkeypatch.setattr(mac_ping_module.os, "getpid", lambda: 0x12345678)
    assert probe_identifier() == 0x5678
    res = mac_ping("192.0.2.10", timeout_ms=500)
    assert res["192.0.2.10"]["id"] == 0x5678


def test_mac_ping_ignores_noise(fake_channels, make_reply):
    fake_channels.noise = [b"\xff" * 5, make_reply(4321, 1, icmp_type=8), make_reply(1, 1, src_mac="de:ad:be:ef:00:01")]
    res = mac_ping("192.0.2.10", timeout_ms=500, identifier=4321)
    assert res["192.0.2.10"]["mac"] == "aa:bb:cc:dd:ee:ff"


def test_mac_ping_wrong_sequence_times_out(fake_channels):
    fake_channels.sequence_offset = 1
    with pytest.raises(ReplyTimeoutError, match="192.0.2.10"):
        mac_ping("192.0.2.10", timeout_ms=150, identifier=4321)
    assert fake_channels.icmp.closed and fake_channels.capture.closed


def test_mac_ping_timeout_is_builtin_timeout(fake_channels):
    fake_channels.respond = False
    with pytest.raises(TimeoutError):
        mac_ping("192.0.2.10", timeout_ms=100, identifier=4321)


def test_mac_ping_send_failure_closes_channels(fake_channels):
    fake_channels.send_error = OSError(errno.EHOSTUNREACH, "No route to host")
    with pytest.raises(ChannelError, match="No route to host"):
        mac_ping("192.0.2.10", timeout_ms=500, identifier=4321)
    assert fake_channels.icmp.closed and fake_channels.capture.closed


def test_mac_ping_capture_open_failure_closes_icmp(fake_channels, monkeypatch):
    def fail(interface=None):
        raise ChannelError("socket(AF_PACKET): Operation not permitted")

    monkeypatch.setattr(mac_ping_module, "open_capture_channel", fail)
    with pytest.raises(ChannelError):
        mac_ping("192.0.2.10", timeout_ms=500, identifier=4321)
    assert fake_channels.icmp.closed
    assert fake_channels.sent == []


@pytest.mark.parametrize("target", ["999.1.1.1", "192.168.1.0/24", "10.0.0.1-5", "host.example", ""])
def test_mac_ping_invalid_target_opens_nothing(fake_channels, target):
    with pytest.raises(PreconditionError):
        mac_ping(target, timeout_ms=500)
    assert fake_channels.icmp is None
    assert fake_channels.capture_interface == "unset"


@pytest.mark.parametrize("timeout_ms", [0, -5])
def test_mac_ping_invalid_timeout(fake_channels, timeout_ms):
    with pytest.raises(PreconditionError):
        mac_ping("192.0.2.10", timeout_ms=timeout_ms)


def test_mac_ping_interface(fake_channels, monkeypatch):
    monkeypatch.setattr("utils.network.get_if_list", lambda: ["lo", "eth0"])
    mac_ping("192.0.2.10", timeout_ms=500, interface="eth0", identifier=4321)
    assert fake_channels.capture_interface == "eth0"
    with pytest.raises(PreconditionError, match="wlan9"):
        mac_ping("192.0.2.10", timeout_ms=500, interface="wlan9", identifier=4321)


def test_mac_ping_vendor(fake_channels, monkeypatch):
    monkeypatch.setattr(mac_ping_module, "lookup_vendor", lambda mac: "Acme Networks")
    res = mac_ping("192.0.2.10", timeout_ms=500, vendor=True, identifier=4321)
    assert res["192.0.2.10"]["vendor"] == "Acme Networks"


def test_mac_ping_verbose_output(fake_channels, capsys):
    from utils import consola
    consola.set_verbose(True)
    mac_ping("192.0.2.10", timeout_ms=500, identifier=4321)
    err = capsys.readouterr().err
    assert "Echo Request id=4321 seq=1" in err
    assert "Echo Reply id=4321 seq=1" in err
