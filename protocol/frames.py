# protocol/frames.py
# Decodificación explícita de tramas Ethernet II / IPv4 / ICMP capturadas en la capa de enlace.
# Todos los campos se leen con struct en orden de red y con desplazamientos calculados:
# la cabecera IP puede llevar opciones, así que el offset de ICMP depende del IHL leído.

import ipaddress
import struct
from dataclasses import dataclass
from typing import Optional

from utils.config import (
    ETH_ALEN, ETH_HLEN, ETH_P_IP, IP_MIN_HLEN, IPPROTO_ICMP, ICMP_HLEN, ICMP_ECHO_REPLY,
)
from .echo import ICMP_ECHO_HEADER, MatchKey

# dst MAC, src MAC, ethertype
ETHER_HEADER = struct.Struct(f"!{ETH_ALEN}s{ETH_ALEN}sH")
# Tamaño mínimo para que una trama pueda contener una respuesta
MIN_FRAME_LEN = ETH_HLEN + IP_MIN_HLEN + ICMP_HLEN

IP_PROTO_OFFSET = 9
IP_SRC_OFFSET = 12


@dataclass(frozen=True)
class ParsedReply:
    ip_header_length: int
    protocol: int
    icmp_type: int
    icmp_code: int
    identifier: int
    sequence: int
    source_hardware_address: bytes
    destination_hardware_address: bytes
    source_ip: str

    @property
    def key(self) -> MatchKey:
        return MatchKey(self.identifier, self.sequence)

    def is_echo_reply(self) -> bool:
        return self.icmp_type == ICMP_ECHO_REPLY and self.icmp_code == 0

    def matches(self, key) -> bool:
        """Solo se acepta un Echo Reply con identificador Y secuencia idénticos a la sonda."""
        return self.is_echo_reply() and self.key == tuple(key)


def parse_frame(frame) -> Optional[ParsedReply]:
    """
    Interpreta una trama cruda. Devuelve None (trama ignorada) si:
      - es más corta que Ethernet + IP mínima + ICMP
      - el ethertype no es IPv4
      - el IHL declarado es menor de 20 bytes
      - el protocolo IP no es ICMP
      - la cabecera ICMP no cabe tras la cabecera IP declarada
      - el mensaje ICMP no es un Echo Reply (tipo 0, código 0)
    La clave (identificador, secuencia) se comprueba después, con ParsedReply.matches().
    """
    if len(frame) < MIN_FRAME_LEN:
        return None

    dst_mac, src_mac, ethertype = ETHER_HEADER.unpack_from(frame, 0)
    if ethertype != ETH_P_IP:
        return None

    ip_hlen = (frame[ETH_HLEN] & 0x0F) * 4
    if ip_hlen < IP_MIN_HLEN:
        return None

    protocol = frame[ETH_HLEN + IP_PROTO_OFFSET]
    if protocol != IPPROTO_ICMP:
        return None

    icmp_offset = ETH_HLEN + ip_hlen
    if len(frame) < icmp_offset + ICMP_HLEN:
        return None

    icmp_type, icmp_code, _csum, identifier, sequence = ICMP_ECHO_HEADER.unpack_from(frame, icmp_offset)
    if icmp_type != ICMP_ECHO_REPLY or icmp_code != 0:
        return None

    src_ip = ipaddress.IPv4Address(bytes(frame[ETH_HLEN + IP_SRC_OFFSET:ETH_HLEN + IP_SRC_OFFSET + 4]))

    return ParsedReply(
        ip_header_length=ip_hlen,
        protocol=protocol,
        icmp_type=icmp_type,
        icmp_code=icmp_code,
        identifier=identifier,
        sequence=sequence,
        source_hardware_address=src_mac,
        destination_hardware_address=dst_mac,
        source_ip=str(src_ip),
    )
