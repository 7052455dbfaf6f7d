"""
Sistema ISP - Tabla de clasificación de estados ONU
Traduce el token crudo que reporta la OLT (ej: "auto-configured", "LOS")
a uno de los tres estados canónicos: online, offline, unknown.
"""
from enum import Enum
from typing import Optional


class OnuState(str, Enum):
    """Estado canónico de una ONU."""
    ONLINE = "online"
    OFFLINE = "offline"
    UNKNOWN = "unknown"


# Token crudo (en minúsculas) → estado canónico
STATUS_TABLE = {
    # BDCOM (EPON)
    "auto-configured": OnuState.ONLINE,
    "registered": OnuState.ONLINE,
    "online": OnuState.ONLINE,
    "deregistered": OnuState.OFFLINE,
    "lost": OnuState.OFFLINE,
    "offline": OnuState.OFFLINE,
    # ZTE (GPON, columna Phase State)
    "working": OnuState.ONLINE,
    "los": OnuState.OFFLINE,
    "dyinggasp": OnuState.OFFLINE,
    "offlinesync": OnuState.OFFLINE,
}


def classify(token: Optional[str]) -> OnuState:
    """Clasifica un token de estado. Nunca falla: lo desconocido es UNKNOWN."""
    if not token:
        return OnuState.UNKNOWN
    return STATUS_TABLE.get(token.strip().lower(), OnuState.UNKNOWN)


def is_status_keyword(token: Optional[str]) -> bool:
    """Indica si el token aparece en la tabla de estados."""
    if not token:
        return False
    return token.strip().lower() in STATUS_TABLE
