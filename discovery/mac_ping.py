# discovery/mac_ping.py
# MAC Ping - Obtiene la MAC del equipo que responde a un ICMP Echo Request.
# Flujo: construir sonda -> enviarla por el canal de red -> capturar en capa de enlace
# el Echo Reply con el mismo (id, seq) -> extraer la MAC origen de la trama Ethernet.

import logging
import os
import time
from contextlib import ExitStack

logging.getLogger("scapy.runtime").setLevel(logging.ERROR)
from scapy.utils import hexdump

from protocol.echo import new_probe
from utils import network
from utils.config import DEFAULT_TIMEOUT_MS, DEFAULT_SEQUENCE
from utils.consola import debug, is_verbose
from utils.errors import ChannelError, ReplyTimeoutError
from utils.mac import format_mac, lookup_vendor
from .capture import WaitOutcome, open_capture_channel, wait_for_reply
from .transmitter import open_icmp_channel, send_probe


def probe_identifier():
    """Identificador ICMP: PID del proceso truncado a 16 bits."""
    return os.getpid() & 0xFFFF


def mac_ping(target, timeout_ms=DEFAULT_TIMEOUT_MS, interface=None, vendor=False,
             identifier=None, sequence=DEFAULT_SEQUENCE):
    """
    Envía un único Echo Request a `target` y devuelve la MAC de quien responde.

    Devuelve {ip: {"mac", "method", "rtt", "id", "seq"[, "vendor"]}}.
    Lanza PreconditionError, ConstructionError, ChannelError o ReplyTimeoutError.
    No hay reintentos.
    """
    ip_addr = network.parse_target(target)
    timeout_ms = network.check_timeout(timeout_ms)
    network.check_interface(interface)

    if identifier is None:
        identifier = probe_identifier()
    probe = new_probe(identifier, sequence)
    debug(f"Echo Request id={probe.identifier} seq={probe.sequence} checksum=0x{probe.checksum:04x}")
    if is_verbose():
        debug("\n" + hexdump(probe.frame, dump=True))

    # Ambos canales se abren antes de enviar para no perder la respuesta,
    # y se cierran en cualquier salida (incluidos los errores)
    with ExitStack() as stack:
        icmp_sock = stack.enter_context(open_icmp_channel())
        capture = stack.enter_context(open_capture_channel(interface))

        t0 = time.perf_counter()
        send_probe(icmp_sock, ip_addr, probe.frame)
        waited = wait_for_reply(capture, probe.key, timeout_ms)
        rtt = time.perf_counter() - t0

    if waited.outcome is WaitOutcome.CHANNEL_ERROR:
        raise ChannelError.from_oserror("recv(AF_PACKET)", waited.error) from waited.error
    if waited.outcome is WaitOutcome.TIMED_OUT:
        raise ReplyTimeoutError(f"Timeout esperando Echo Reply de {ip_addr} ({timeout_ms} ms)")

    mac = format_mac(waited.reply.source_hardware_address)
    entry = {"mac": mac, "method": "ICMP", "rtt": rtt, "id": identifier, "seq": sequence}
    if vendor:
        entry["vendor"] = lookup_vendor(mac)
    return {ip_addr: entry}
