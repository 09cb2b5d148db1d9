# protocol/echo.py
# Construcción del ICMP Echo Request de tamaño fijo que se usa como sonda.

import struct
import time
from dataclasses import dataclass
from typing import NamedTuple, Optional

from utils.config import ICMP_ECHO_REQUEST, ICMP_HLEN, PACKET_LEN, DEFAULT_SEQUENCE
from utils.errors import ConstructionError
from .checksum import internet_checksum

# type, code, checksum, identifier, sequence (orden de red)
ICMP_ECHO_HEADER = struct.Struct("!BBHHH")
# Marca de tiempo al inicio de los datos: segundos desde epoch, 8 bytes
TIMESTAMP = struct.Struct("!q")


class MatchKey(NamedTuple):
    """Clave que relaciona la sonda enviada con su Echo Reply."""
    identifier: int
    sequence: int


def build_echo_request(identifier: int, sequence: int, length: int = PACKET_LEN,
                       now: Optional[float] = None) -> bytes:
    """
    Devuelve un Echo Request de `length` bytes listo para enviar.

    Cabecera: type=8, code=0, checksum, identifier y sequence en orden de red.
    Datos: marca de tiempo (truncada si no cabe) seguida de ceros.
    El checksum se calcula sobre la trama completa con el campo a cero.
    """
    if length is None or length < ICMP_HLEN:
        raise ConstructionError(f"Longitud de trama no válida: {length} (mínimo {ICMP_HLEN})")
    for name, value in (("identifier", identifier), ("sequence", sequence)):
        if not 0 <= value <= 0xFFFF:
            raise ConstructionError(f"{name} fuera de rango 0-65535: {value}")

    frame = bytearray(length)
    ICMP_ECHO_HEADER.pack_into(frame, 0, ICMP_ECHO_REQUEST, 0, 0, identifier, sequence)

    stamp = TIMESTAMP.pack(int(time.time() if now is None else now))
    data_len = length - ICMP_HLEN
    frame[ICMP_HLEN:ICMP_HLEN + min(data_len, len(stamp))] = stamp[:data_len]

    csum = internet_checksum(frame, byteorder="big")
    struct.pack_into("!H", frame, 2, csum)
    return bytes(frame)


@dataclass(frozen=True)
class EchoProbe:
    identifier: int
    sequence: int
    frame: bytes

    @property
    def checksum(self) -> int:
        return struct.unpack_from("!H", self.frame, 2)[0]

    @property
    def key(self) -> MatchKey:
        return MatchKey(self.identifier, self.sequence)

    def __len__(self):
        return len(self.frame)


def new_probe(identifier: int, sequence: int = DEFAULT_SEQUENCE, now: Optional[float] = None) -> EchoProbe:
    frame = build_echo_request(identifier, sequence, now=now)
    return EchoProbe(identifier=identifier, sequence=sequence, frame=frame)
