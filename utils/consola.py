# utils/consola.py
# Fichero utilizado para centralizar las funciones de salida de consola.
# Los mensajes de diagnóstico van a stderr; stdout queda reservado para el resultado.

import sys

from colorama import init, Fore, Style

init(autoreset=True)

_verbose = False


def set_verbose(enabled):
    global _verbose
    _verbose = bool(enabled)


def is_verbose():
    return _verbose


def error(msg):
    print(f"{Fore.RED}[!] {msg}{Style.RESET_ALL}", file=sys.stderr)

def warning(msg):
    print(f"{Fore.YELLOW}[!] {msg}{Style.RESET_ALL}", file=sys.stderr)

def debug(msg):
    if _verbose:
        print(f"{Style.DIM}[*] {msg}{Style.RESET_ALL}", file=sys.stderr)

def info(msg):
    print(msg)

def notice(msg):
    print(f"{Fore.CYAN}[*] {msg}{Style.RESET_ALL}", file=sys.stderr)
