# tests/conftest.py
# Fixtures comunes: tramas construidas con Scapy y canales falsos (no hace falta root)

import socket
import struct

import pytest
from scapy.all import Ether, IP, ICMP, Raw

import discovery.mac_ping as mac_ping_module
from utils import consola

TARGET_MAC = "aa:bb:cc:dd:ee:ff"
LOCAL_MAC = "11:22:33:44:55:66"


@pytest.fixture(autouse=True)
def _quiet():
    consola.set_verbose(False)
    yield
    consola.set_verbose(False)


@pytest.fixture
def make_reply():
    """Devuelve una función que construye una trama Ethernet/IPv4/ICMP en bytes."""
    def _make(identifier, sequence, icmp_type=0, code=0, src_mac=TARGET_MAC,
              src_ip="192.0.2.10", payload=b"\x00" * 56):
        pkt = (Ether(src=src_mac, dst=LOCAL_MAC)
               / IP(src=src_ip, dst="192.0.2.1")
               / ICMP(type=icmp_type, code=code, id=identifier, seq=sequence)
               / Raw(payload))
        return bytes(pkt)
    return _make


@pytest.fixture
def capture_pair():
    """(feeder, capture): lo que se envía por feeder llega como una trama a capture."""
    feeder, capture = socket.socketpair(socket.AF_UNIX, socket.SOCK_DGRAM)
    yield feeder, capture
    feeder.close()
    capture.close()


class FakeCapture:
    """Envoltorio del extremo de captura que registra el cierre."""

    def __init__(self, sock):
        self.sock = sock
        self.closed = False

    def fileno(self):
        return self.sock.fileno()

    def recv_into(self, buf):
        return self.sock.recv_into(buf)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed = True
        return False


class FakeIcmpChannel:
    """
    Sustituye al socket raw ICMP. Al recibir el Echo Request, inyecta en la
    captura la respuesta configurada en el controlador.
    """

    def __init__(self, ctl):
        self.ctl = ctl
        self.closed = False

    def sendto(self, frame, addr):
        self.ctl.sent.append((bytes(frame), addr))
        if self.ctl.send_error is not None:
            raise self.ctl.send_error
        if self.ctl.respond:
            identifier, sequence = struct.unpack_from("!HH", frame, 4)
            for extra in self.ctl.noise:
                self.ctl.feeder.send(extra)
            reply = self.ctl.make_reply(identifier, sequence + self.ctl.sequence_offset,
                                        src_mac=self.ctl.reply_mac)
            self.ctl.feeder.send(reply)
        return len(frame)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed = True
        return False


class ChannelController:
    def __init__(self, feeder, capture, make_reply):
        self.feeder = feeder
        self.capture = FakeCapture(capture)
        self.make_reply = make_reply
        self.icmp = None
        self.sent = []
        self.noise = []
        self.respond = True
        self.reply_mac = TARGET_MAC
        self.sequence_offset = 0
        self.send_error = None
        self.capture_interface = "unset"

    def open_icmp(self):
        self.icmp = FakeIcmpChannel(self)
        return self.icmp

    def open_capture(self, interface=None):
        self.capture_interface = interface
        return self.capture


@pytest.fixture
def fake_channels(monkeypatch, capture_pair, make_reply):
    feeder, capture = capture_pair
    ctl = ChannelController(feeder, capture, make_reply)
    monkeypatch.setattr(mac_ping_module, "open_icmp_channel", ctl.open_icmp)
    monkeypatch.setattr(mac_ping_module, "open_capture_channel", ctl.open_capture)
    return ctl
