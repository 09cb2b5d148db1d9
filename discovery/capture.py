# discovery/capture.py
# Canal de captura en capa de enlace (AF_PACKET) y espera acotada del Echo Reply.

import enum
import logging
import select
import socket
import time
from dataclasses import dataclass
from typing import Optional

logging.getLogger("scapy.runtime").setLevel(logging.ERROR)
from scapy.all import Ether

from protocol.frames import ParsedReply, parse_frame
from utils.config import ETH_P_ALL, RECV_BUFSIZE
from utils.errors import ChannelError
from utils.consola import debug, is_verbose


class WaitOutcome(enum.Enum):
    MATCHED = "matched"
    TIMED_OUT = "timed_out"
    CHANNEL_ERROR = "channel_error"


@dataclass
class WaitResult:
    outcome: WaitOutcome
    reply: Optional[ParsedReply] = None
    error: Optional[OSError] = None
    skipped: int = 0
    elapsed: float = 0.0

    @property
    def matched(self):
        return self.outcome is WaitOutcome.MATCHED


def open_capture_channel(interface=None):
    """
    Abre un socket AF_PACKET que recibe todas las tramas (ETH_P_ALL).
    Si se indica interfaz, la captura se limita a ella.
    Solo disponible en Linux.
    """
    if not hasattr(socket, "AF_PACKET"):
        raise ChannelError("socket(AF_PACKET): no soportado en esta plataforma")
    try:
        sock = socket.socket(socket.AF_PACKET, socket.SOCK_RAW, socket.htons(ETH_P_ALL))
    except OSError as e:
        raise ChannelError.from_oserror("socket(AF_PACKET)", e) from e

    if interface:
        try:
            sock.bind((interface, 0))
        except OSError as e:
            sock.close()
            raise ChannelError.from_oserror(f"bind {interface}", e) from e

    debug(f"Canal de captura abierto en {interface or 'todas las interfaces'}")
    return sock


def wait_for_reply(capture, key, timeout_ms, deadline=None, bufsize=RECV_BUFSIZE):
    """
    Lee tramas de `capture` hasta encontrar el Echo Reply cuya clave
    (identificador, secuencia) coincide con `key`, o hasta agotar el plazo.

    Se usa un único plazo absoluto (reloj monotónico): cada select() espera
    solo el tiempo restante, así el tráfico ajeno no alarga la espera total.
    Las tramas mal formadas o ajenas se descartan sin error.

    `capture` solo necesita fileno() y recv_into().
    """
    start = time.monotonic()
    if deadline is None:
        deadline = start + timeout_ms / 1000.0

    # Buffer reutilizado en cada lectura
    buf = bytearray(bufsize)
    view = memoryview(buf)
    skipped = 0

    while True:
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            break
        try:
            ready, _, _ = select.select([capture], [], [], remaining)
            if not ready:
                break
            n = capture.recv_into(buf)
        except OSError as e:
            return WaitResult(WaitOutcome.CHANNEL_ERROR, error=e, skipped=skipped,
                              elapsed=time.monotonic() - start)

        reply = parse_frame(view[:n])
        if reply is None or not reply.matches(key):
            skipped += 1
            continue

        debug(f"Echo Reply id={reply.identifier} seq={reply.sequence} desde {reply.source_ip} "
              f"({skipped} tramas descartadas)")
        if is_verbose():
            debug(Ether(bytes(view[:n])).summary())
        return WaitResult(WaitOutcome.MATCHED, reply=reply, skipped=skipped,
                          elapsed=time.monotonic() - start)

    debug(f"Plazo agotado tras descartar {skipped} tramas")
    return WaitResult(WaitOutcome.TIMED_OUT, skipped=skipped, elapsed=time.monotonic() - start)
