# utils/module_summary.py
from typing import Any, Dict, Optional


# ---------------------------------------------
# Crear sumario final para el resultado de mac_ping
# ---------------------------------------------
def summarize_discovery_results(resultado: Dict[str, Dict[str, Any]]) -> Dict[str, Any]:
    """
    Resume el dict { ip: {"mac", "method", "rtt", "vendor"...} } devuelto por mac_ping.
    Cada host queda como "IP (METHOD) MAC [vendor]".
    """
    hosts_summary = []
    hosts_sorted = sorted(resultado)
    for ip in hosts_sorted:
        info = resultado[ip]
        meth = (info.get("method") or "").upper()
        line = f"{ip} ({meth})" if meth else ip
        if info.get("mac"):
            line += f" {info['mac']}"
        if info.get("vendor"):
            line += f" [{info['vendor']}]"
        hosts_summary.append(line)

    return {"type": "discovery", "count": len(hosts_sorted), "hosts": hosts_sorted, "hosts_summary": hosts_summary, "data": resultado}


# ---------------------------------------------
def build_module_summary(module_result: Optional[Dict[str, Dict[str, Any]]]) -> Optional[Dict[str, Any]]:
    """Sin resultado (error o timeout) no hay sumario del módulo."""
    if module_result is None:
        return None
    return summarize_discovery_results(module_result)
