# utils/network.py
# Implementación de funciones relacionadas con la red: validación del objetivo
# y de la interfaz de captura antes de abrir ningún canal.

import ipaddress
import logging

logging.getLogger("scapy.runtime").setLevel(logging.ERROR)
from scapy.all import get_if_list

from utils.errors import PreconditionError


def parse_target(target_string):
    """
    Valida que el objetivo es UNA dirección IPv4 en notación decimal con puntos.
    Ejemplo de entrada: " 192.168.1.10 "  -->  salida: "192.168.1.10"

    No se aceptan rangos, redes CIDR ni nombres de host: la sonda va a un único destino.
    Lanza PreconditionError si la cadena no es una IPv4 válida.
    """
    if target_string is None:
        raise PreconditionError("No se ha indicado ninguna dirección IPv4")

    target = target_string.strip()
    if '/' in target or '-' in target or ',' in target:
        raise PreconditionError(f"Solo se admite una dirección IPv4, no rangos: {target}")
    try:
        ip = ipaddress.IPv4Address(target)
    except ValueError:
        raise PreconditionError(f"IP no válida: {target}")

    return str(ip)


def check_interface(interface):
    """
    Comprueba que la interfaz existe en el sistema (según Scapy).
    None significa "todas las interfaces" y siempre es válido.
    """
    if interface is None:
        return None
    available = get_if_list()
    if interface not in available:
        raise PreconditionError(
            f"Interfaz desconocida: {interface} (disponibles: {', '.join(available) or '-'})"
        )
    return interface


def check_timeout(timeout_ms):
    if timeout_ms is None or timeout_ms <= 0:
        raise PreconditionError(f"Timeout no válido: {timeout_ms} ms (debe ser > 0)")
    return int(timeout_ms)
