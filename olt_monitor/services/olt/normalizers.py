"""
Sistema ISP - Normalizadores de campos
Funciones puras para MACs, interfaces y valores numéricos del CLI de la OLT.
"""
import re
from typing import Optional, Tuple

from olt_monitor.services.olt.olt_base import OltError, NOT_AVAILABLE

_MAC_SEPARATORS = re.compile(r"[:\-.\s]")
_HEX12 = re.compile(r"^[0-9a-f]{12}$")

# Prefijos de interfaz aceptados al recibir "epon0/1:4", "gpon-onu_1/2/1:3", etc.
_INTERFACE_PREFIX = re.compile(r"^(?:epon|gpon-onu_|gpon-olt_|gpon)", re.IGNORECASE)


def normalize_mac(value: Optional[str]) -> str:
    """
    Normaliza una MAC al formato canónico aa:bb:cc:dd:ee:ff.

    Acepta "70a5.6add.7e1d" (BDCOM/Cisco), "70-A5-6A-DD-7E-1D",
    "70:a5:6a:dd:7e:1d" o "70a56add7e1d". Si lo recibido no son
    12 dígitos hex, se regresa tal cual (sin espacios alrededor).
    """
    if not value:
        return ""
    cleaned = value.strip()
    raw = _MAC_SEPARATORS.sub("", cleaned).lower()
    if not _HEX12.match(raw):
        return cleaned
    return ":".join(raw[i:i + 2] for i in range(0, 12, 2))


def bdcom_mac_to_canonical(token: str) -> str:
    """MAC de la tabla BDCOM: solo se convierte si viene agrupada con puntos."""
    if token and "." in token:
        return normalize_mac(token)
    return token


def parse_epon_interface(interface: str) -> Tuple[str, str]:
    """
    Parsea una interfaz de ONU (ej: "epon0/1:4", "0/1:4" → ("0/1", "4")).
    En referencias ZTE ("gpon-onu_1/2/1:3") se descarta el rack → ("2/1", "3").
    """
    cleaned = (interface or "").strip()
    prefix = _INTERFACE_PREFIX.match(cleaned)
    normalized = cleaned[prefix.end():] if prefix else cleaned

    parts = normalized.split(":")
    if len(parts) != 2 or not parts[0].strip() or not parts[1].strip():
        raise OltError(
            f"Formato de interfaz inválido: {interface}. "
            f"Formato esperado: \"epon0/1:2\" o \"0/1:2\""
        )

    port, onu_id = parts[0].strip(), parts[1].strip()
    if prefix and prefix.group(0).lower().startswith("gpon") and port.count("/") == 2:
        port = port.split("/", 1)[1]
    return port, onu_id


def is_na(value: Optional[str]) -> bool:
    """True si el valor es vacío o el literal N/A que usa la OLT."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip() or value.strip().upper() == NOT_AVAILABLE
    return False


def to_int(token: Optional[str]) -> Optional[int]:
    """Convierte un token a entero ("1180", "1180m" → 1180)."""
    if token is None:
        return None
    match = re.match(r"^\s*(-?\d+)", str(token))
    if not match:
        return None
    return int(match.group(1))


def to_float(token: Optional[str]) -> Optional[float]:
    """Convierte un token a float; None si no es numérico."""
    if token is None:
        return None
    try:
        return float(str(token).strip())
    except ValueError:
        return None


def snippet(raw: Optional[str], limit: int = 500) -> str:
    """Fragmento acotado de la salida cruda para diagnóstico."""
    return (raw or "")[:limit]
