# discovery/transmitter.py
# Canal raw de capa de red (AF_INET, SOCK_RAW, IPPROTO_ICMP) y envío de la sonda.
# El kernel añade la cabecera IP; aquí solo se entrega el mensaje ICMP.

import socket

from utils.errors import ChannelError
from utils.consola import debug


def open_icmp_channel():
    """
    Abre el socket raw ICMP. Se usa como gestor de contexto:
        with open_icmp_channel() as sock: ...
    Requiere CAP_NET_RAW (root).
    """
    try:
        sock = socket.socket(socket.AF_INET, socket.SOCK_RAW, socket.IPPROTO_ICMP)
    except OSError as e:
        raise ChannelError.from_oserror("socket raw icmp", e) from e
    debug(f"Canal ICMP abierto (fd={sock.fileno()})")
    return sock


def send_probe(sock, destination, frame):
    """
    Envía `frame` tal cual a `destination` (sin puerto: entrega a nivel de red).
    Lanza ChannelError si el envío falla o no se aceptan todos los bytes.
    """
    try:
        sent = sock.sendto(frame, (destination, 0))
    except OSError as e:
        raise ChannelError.from_oserror(f"sendto {destination}", e) from e

    if sent != len(frame):
        raise ChannelError(f"sendto {destination}: enviados {sent} de {len(frame)} bytes")

    debug(f"Echo Request enviado a {destination} ({sent} bytes)")
    return sent
