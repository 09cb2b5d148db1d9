# utils/config.py
# Fichero con constantes de protocolo y valores por defecto de la herramienta

# ICMPv4
ICMP_ECHO_REPLY = 0
ICMP_ECHO_REQUEST = 8
IPPROTO_ICMP = 1
ICMP_HLEN = 8                 # type, code, checksum, id, seq

# Ethernet II
ETH_P_IP = 0x0800
ETH_P_ALL = 0x0003            # todos los protocolos (AF_PACKET)
ETH_ALEN = 6
ETH_HLEN = 14                 # dst(6) + src(6) + ethertype(2)

# IPv4
IP_MIN_HLEN = 20              # IHL=5 sin opciones

# Sonda
PACKET_LEN = 64               # 8 bytes de cabecera + 56 de datos
DEFAULT_SEQUENCE = 1
DEFAULT_TIMEOUT_MS = 3000
RECV_BUFSIZE = 2048

# Códigos de salida
EXIT_OK = 0
EXIT_FAILURE = 1
