# protocol package
# Codificación/decodificación de las tramas: checksum, Echo Request y parseo de respuestas.
# No realiza ninguna operación de red.

from .checksum import internet_checksum, checksum_is_valid
from .echo import EchoProbe, MatchKey, build_echo_request, new_probe
from .frames import ParsedReply, parse_frame

__all__ = [
    "internet_checksum",
    "checksum_is_valid",
    "EchoProbe",
    "MatchKey",
    "build_echo_request",
    "new_probe",
    "ParsedReply",
    "parse_frame",
]
