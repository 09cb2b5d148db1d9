# protocol/checksum.py
# "Internet checksum" de 16 bits (RFC 1071), complemento a uno.

import sys


def internet_checksum(data, byteorder=sys.byteorder):
    """
    Calcula la suma de comprobación de un buffer de cualquier longitud (incluida 0).

    Los bytes se agrupan en palabras de 16 bits leídas con `byteorder`
    (por defecto, el orden nativo de la máquina). Si la longitud es impar, el
    último byte se trata como si el buffer tuviera un cero de relleno al final.

    El resultado está expresado en ese mismo orden: para escribirlo en la
    trama hay que usar `value.to_bytes(2, byteorder)`. Con byteorder="big"
    el valor ya está en orden de red ("!H").
    """
    data = bytes(data)
    total = 0
    end = len(data) - (len(data) % 2)
    for i in range(0, end, 2):
        total += int.from_bytes(data[i:i + 2], byteorder)
    if end != len(data):
        total += int.from_bytes(data[end:] + b"\x00", byteorder)

    # Plegar los acarreos sobre los 16 bits bajos
    while total >> 16:
        total = (total & 0xFFFF) + (total >> 16)

    return ~total & 0xFFFF


def checksum_is_valid(data):
    """Un buffer con el checksum ya escrito debe sumar 0xFFFF (checksum resultante 0)."""
    return internet_checksum(data) == 0
