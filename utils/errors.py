# utils/errors.py
# Jerarquía de excepciones de la herramienta.
# Todas heredan de ProbeError para que la CLI pueda capturarlas en un único punto.


class ProbeError(Exception):
    """Error fatal del intento de sondeo (no hay reintentos)."""
    pass


class PreconditionError(ProbeError):
    """Argumentos inválidos: dirección, interfaz o timeout."""
    pass


class ConstructionError(ProbeError):
    """No se ha podido construir el Echo Request."""
    pass


class ChannelError(ProbeError):
    """Fallo al abrir, enviar o leer de un canal raw. Incluye el mensaje del sistema."""

    @classmethod
    def from_oserror(cls, operation, exc):
        reason = exc.strerror or str(exc)
        return cls(f"{operation}: {reason}")


class ReplyTimeoutError(ProbeError, TimeoutError):
    """No ha llegado ningún Echo Reply coincidente dentro del plazo."""
    pass
