# discovery package
# Este archivo indica que discovery es un módulo de Python
# y permite importar sus funciones de forma centralizada.
# mac_ping se importa como módulo para no ocultarlo con la función del mismo nombre.

from . import mac_ping
from .mac_ping import probe_identifier
from .transmitter import open_icmp_channel, send_probe
from .capture import WaitOutcome, WaitResult, open_capture_channel, wait_for_reply

__all__ = [
    "mac_ping",
    "probe_identifier",
    "open_icmp_channel",
    "send_probe",
    "open_capture_channel",
    "wait_for_reply",
    "WaitOutcome",
    "WaitResult",
]
