# utils/mac.py
# Presentación de direcciones MAC y búsqueda del fabricante (OUI)

import logging

logging.getLogger("scapy.runtime").setLevel(logging.ERROR)
from scapy.all import conf


def format_mac(hw_addr):
    """Devuelve la MAC como 'xx:xx:xx:xx:xx:xx' (hexadecimal en minúsculas)."""
    return ":".join(f"{b:02x}" for b in bytes(hw_addr))


def lookup_vendor(mac, db=None):
    """
    Busca el fabricante de la tarjeta en la base de datos OUI de Scapy.
    Devuelve None si la base no está cargada o el prefijo no es conocido.
    """
    if db is None:
        db = conf.manufdb
    if db is None:
        return None
    try:
        short_name, long_name = db.lookup(mac)
    except KeyError:
        return None
    # Scapy devuelve la propia MAC cuando no conoce el prefijo
    if not short_name or short_name.lower() == mac.lower():
        return None
    return long_name or short_name
