#!/usr/bin/env python3
"""
MacPing.py
Descubre la dirección MAC del equipo que responde a un ICMP Echo Request.

Envía un único Echo Request (64 bytes, id = PID, seq = 1) por un socket raw de
capa de red y, en paralelo, escucha en la capa de enlace (AF_PACKET) hasta ver
el Echo Reply con el mismo identificador y secuencia. La MAC origen de esa
trama Ethernet es el resultado.

Salida:
  - stdout: una única línea 'xx:xx:xx:xx:xx:xx' si hay respuesta (código 0)
  - stderr: diagnóstico legible en caso de error o timeout (código 1)

Opciones añadidas:
  --timeout MS    -> Plazo de espera de la respuesta (por defecto 3000 ms)
  --interface     -> Limita la captura a una interfaz
  --vendor        -> Muestra el fabricante (OUI) por stderr
  --summary       -> Muestra al final un resumen (texto o JSON)
  --format        -> Formato del resumen ('text' o 'json')
  --output        -> Ruta de fichero para volcar ("append") el resumen

Ejemplo de uso:
    sudo python3 MacPing.py 192.168.1.1
    sudo python3 MacPing.py 192.168.1.1 -i eth0 --timeout 1000 --vendor
    sudo python3 MacPing.py 192.168.1.1 --summary --format json --output results.log
"""

import sys
import os
import time
import json
from argparse import RawTextHelpFormatter, ArgumentParser
from datetime import datetime
from dataclasses import dataclass, asdict, field
from typing import Any, Dict, Optional

# Importación desde otros módulos
from discovery.mac_ping import mac_ping, probe_identifier
from utils import (
    DEFAULT_TIMEOUT_MS, DEFAULT_SEQUENCE, EXIT_OK, EXIT_FAILURE, ProbeError,
    build_module_summary, error, warning, info, notice, set_verbose,
)

TECHNIQUE = "mac_ping"


# ---------------------------------------------
def need_root():
    """
    Comprueba que el proceso puede abrir sockets raw (root / CAP_NET_RAW).
    Sin privilegios no se llega a abrir ningún canal: se aborta con código 1.
    """
    if not hasattr(os, "geteuid"):
        # Sistemas sin geteuid (Windows): AF_PACKET tampoco existe
        error("Esta herramienta necesita Linux con permisos de root (CAP_NET_RAW).")
        sys.exit(EXIT_FAILURE)
    if os.geteuid() != 0:
        error("Se necesitan permisos de root (CAP_NET_RAW). Ejecuta con sudo.")
        sys.exit(EXIT_FAILURE)


# ---------------------------------------------
"""
Esta clase centraliza la impresión de mensajes en consola y opcionalmente en un archivo.
Soporta dos modos: texto o JSON.
"""
class Printer:
    def __init__(self, mode="text", outfile=None):
        self.mode = mode           # "text" o "json"
        self.outfile = outfile     # Ruta opcional para guardar salida

    def emit(self, level, message, **meta):
        """
        level: tipo de mensaje ('ok', 'info', 'warn', etc.)
        message: texto principal
        meta: datos adicionales (solo se incluyen en JSON)
        """
        if self.mode == "json":
            obj = {"level": level, "message": message, **meta}
            line = json.dumps(obj, ensure_ascii=False)
        else:
            prefix = {
                "ok": "[+]",
                "info": "[*]",
                "warn": "[!]"
            }.get(level, "[-]")
            line = f"{prefix} {message}"

        print(line)
        if self.outfile:
            append_to_file(self.outfile, line)


def append_to_file(path, *lines):
    """Añade líneas al fichero de salida. Un fallo de escritura solo genera un aviso."""
    try:
        with open(path, "a", encoding="utf-8") as f:
            for line in lines:
                f.write(line + "\n")
    except OSError as e:
        warning(f"No se pudo escribir en {path}: {e.strerror or e}")


# ---------------------------------------------
"""
 Estructura utilizada para encapsular un resumen de la ejecución y poder exportarlo en JSON limpio.
"""
@dataclass
class RunSummary:
    technique: str
    target: str | None
    interface: str | None
    timeout_ms: int | None
    identifier: int | None
    sequence: int | None
    elapsed_seconds: float
    exit_code: int = 0
    mac: str | None = None
    error: str | None = None
    module_summary: Optional[Dict[str, Any]] = field(default=None)
    module_result: Optional[Dict[str, Any]] = field(default=None)  # opcional (JSON)


def build_parser():
    parser = ArgumentParser(
        description="""
            Discover the MAC address of a host answering ICMP Echo

""",
        formatter_class=RawTextHelpFormatter
    )
    parser.add_argument("target", help="Destination IPv4 address (dotted-decimal)")
    parser.add_argument("-w", "--timeout", metavar="MS", type=int, default=DEFAULT_TIMEOUT_MS,
                        help=f"Time to wait for the Echo Reply in milliseconds (default: {DEFAULT_TIMEOUT_MS})")
    parser.add_argument("-i", "--interface", metavar="", help="Capture only on this network interface")
    parser.add_argument("--vendor", action="store_true", help="Also show the NIC vendor (OUI lookup) on stderr")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug information on stderr")
    parser.add_argument("-S", "--summary", action="store_true", help="Show final summary after the MAC line")
    parser.add_argument("--format", choices=["text", "json"], default="text", help="Final summary output format")
    parser.add_argument("--output", dest="output_file", default=None, help="File path to dump the summary (append)")
    return parser


def emit_summary(args, printer, summary):
    stamp = f"\n### {datetime.now().strftime('%Y-%m-%d %H:%M:%S')} ###"
    if args.format == "json":
        line = json.dumps(asdict(summary), ensure_ascii=False)
        if args.output_file:
            append_to_file(args.output_file, stamp, line)
        print(line)
        return

    if args.output_file:
        append_to_file(args.output_file, stamp)
    printer.emit(
        "info",
        (f"Resumen: {summary.technique} target={summary.target} "
         f"elapsed={summary.elapsed_seconds}s exit={summary.exit_code}")
    )
    module_summary = summary.module_summary
    if module_summary and module_summary.get("type") == "discovery":
        printer.emit(
            "info",
            f"  hosts activos: {module_summary.get('count', 0)} -> "
            f"{', '.join(module_summary.get('hosts_summary', [])) or '-'}")
    elif summary.error:
        printer.emit("warn", f"  error: {summary.error}")


# ---------------------------------------------
# Función main()
#
def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    set_verbose(args.verbose)

    # Validación de root antes de cualquier actividad de red
    need_root()

    t0 = time.perf_counter()
    exit_code = EXIT_OK
    module_result = None
    mac = None
    failure = None

    try:
        module_result = mac_ping(args.target, timeout_ms=args.timeout, interface=args.interface,
                                 vendor=args.vendor)
        entry = next(iter(module_result.values()))
        mac = entry["mac"]
        # La única línea de stdout, sin colores
        info(mac)
        if args.vendor:
            notice(f"Fabricante: {entry.get('vendor') or 'desconocido'}")

    except ProbeError as e:
        exit_code = EXIT_FAILURE
        failure = str(e)
        error(failure)

    elapsed = time.perf_counter() - t0

    if args.summary:
        summary = RunSummary(
            technique=TECHNIQUE,
            target=args.target,
            interface=args.interface,
            timeout_ms=args.timeout,
            identifier=probe_identifier(),
            sequence=DEFAULT_SEQUENCE,
            elapsed_seconds=round(elapsed, 2),
            exit_code=exit_code,
            mac=mac,
            error=failure,
            module_summary=build_module_summary(module_result),
            module_result=module_result if args.format == "json" else None,
        )
        emit_summary(args, Printer(mode=args.format, outfile=args.output_file), summary)

    return exit_code

# ---------------------------------------------
if __name__ == "__main__":
    sys.exit(main())
