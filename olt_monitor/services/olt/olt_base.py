"""
Sistema ISP - OLT Base (Clase Abstracta)
Define la interfaz que todos los vendors de OLT deben implementar.
Cada marca (BDCOM, ZTE, Huawei...) construye sus propios comandos CLI
y parsea la salida de texto de esos comandos.

El motor es puro: no abre sesiones ni envía nada. Recibe (puerto, ONU)
y regresa texto de comandos; recibe texto crudo y regresa registros.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum
from typing import Optional, List, Dict, Any, Callable, Tuple
import logging

from olt_monitor.services.olt.status_map import OnuState

logger = logging.getLogger("olt_base")

# Valor que la OLT imprime cuando un campo no aplica
NOT_AVAILABLE = "N/A"


class OltError(Exception):
    """Error del motor OLT (configuración o uso incorrecto)."""
    pass


class UnsupportedVendorError(OltError):
    """La marca solicitada no tiene vendor registrado."""

    def __init__(self, vendor_key: str, supported: List[str]):
        self.vendor_key = vendor_key
        self.supported = list(supported)
        super().__init__(
            f"Vendor OLT no soportado: '{vendor_key}'. "
            f"Vendors soportados: {', '.join(self.supported)}"
        )


class UnsupportedQueryError(OltError):
    """El vendor no implementa la consulta opcional solicitada."""
    pass


# ================================================================
# COMANDOS
# ================================================================

@dataclass(frozen=True)
class CommandText:
    """
    Líneas de comando a enviar a la sesión, en orden.
    Las primeras `privilege_count` líneas son de escalamiento (ej: "enable").
    """
    lines: Tuple[str, ...]
    privilege_count: int = 0

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    @property
    def query_lines(self) -> Tuple[str, ...]:
        """Solo las líneas de consulta, sin el escalamiento de privilegios."""
        return self.lines[self.privilege_count:]

    def __iter__(self):
        return iter(self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    def __str__(self) -> str:
        return self.text


class Capability(str, Enum):
    """Consultas opcionales que un vendor puede o no implementar."""
    ACTIVE_DETAIL = "active_detail"
    INACTIVE_DETAIL = "inactive_detail"
    CONFIG = "config"
    MAC_TABLE = "mac_table"
    PORT_STATE = "port_state"


@dataclass(frozen=True)
class CommandPair:
    """Constructor de comando + parser de su salida para una capacidad."""
    build: Callable[[str, str], CommandText]
    parse: Callable[[str], Any]


# ================================================================
# REGISTROS
# ================================================================

class _Record:
    """Serialización común: omite campos sin valor."""

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if isinstance(value, Enum):
                value = value.value
            elif is_dataclass(value):
                value = value.to_dict()
            data[f.name] = value
        return data


@dataclass
class OnuStatusRecord(_Record):
    """Estado de una ONU según la tabla de la OLT."""
    port: str = ""
    onu_id: str = ""
    status: OnuState = OnuState.UNKNOWN
    vendor_id: Optional[str] = None
    model_id: Optional[str] = None
    onu_type: Optional[str] = None        # vendor_id + " " + model_id
    mac_address: Optional[str] = None
    description: Optional[str] = None
    bind_type: Optional[str] = None       # static / dynamic
    onu_status: Optional[str] = None      # token crudo de la OLT (auditoría)
    last_dereg_reason: Optional[str] = None
    distance: Optional[int] = None        # metros
    oam_status: Optional[str] = None
    alive_time: Optional[str] = None      # alive (online) o absent (offline)
    last_reg_time: Optional[str] = None
    last_dereg_time: Optional[str] = None
    error: Optional[str] = None
    raw_data: Dict[str, Any] = field(default_factory=dict)


@dataclass
class OnuDetailRecord(_Record):
    """Datos parciales de active-onu / inactive-onu, se fusionan al estado."""
    oam_status: Optional[str] = None
    distance: Optional[int] = None
    last_reg_time: Optional[str] = None
    last_dereg_time: Optional[str] = None
    last_dereg_reason: Optional[str] = None
    alive_time: Optional[str] = None
    raw_data: Dict[str, Any] = field(default_factory=dict)


@dataclass
class SignalLevelRecord(_Record):
    """Niveles ópticos (DDM). Ausente = no vino en la salida, no cero."""
    port: str = ""
    onu_id: str = ""
    rx_power: Optional[float] = None      # dBm
    tx_power: Optional[float] = None      # dBm
    temperature: Optional[float] = None   # °C
    voltage: Optional[float] = None       # V
    bias_current: Optional[float] = None  # mA
    raw_data: Dict[str, Any] = field(default_factory=dict)


@dataclass
class OnuInfoRecord(_Record):
    """Información de hardware/firmware de la ONU."""
    port: str = ""
    onu_id: str = ""
    mac_address: Optional[str] = None
    serial_number: Optional[str] = None
    vendor_id: Optional[str] = None
    model_name: Optional[str] = None
    firmware_version: Optional[str] = None
    hardware_version: Optional[str] = None
    software_version: Optional[str] = None
    ip_address: Optional[str] = None
    vlan: Optional[int] = None
    bandwidth_upstream: Optional[int] = None
    bandwidth_downstream: Optional[int] = None
    raw_data: Dict[str, Any] = field(default_factory=dict)


@dataclass
class SlaRecord(_Record):
    """Límites de tasa en kbps tal como los reporta la OLT."""
    pir: Optional[int] = None
    cir: Optional[int] = None


@dataclass
class OnuConfigRecord(_Record):
    """Configuración VLAN / SLA de la ONU."""
    vlan_mode: Optional[str] = None
    vlan_id: Optional[int] = None
    priority: Optional[int] = None
    upstream_sla: Optional[SlaRecord] = None
    downstream_sla: Optional[SlaRecord] = None


@dataclass
class MacAddressEntry(_Record):
    """Entrada de la tabla MAC aprendida detrás de la ONU."""
    mac_address: str
    vlan: int
    type: Optional[str] = None            # crudo, ej: DYNAMIC


@dataclass
class PortStateRecord(_Record):
    """Estado del puerto Ethernet de la ONU."""
    hardware_state: str = "unknown"       # Link-Up / Link-Down / unknown
    speed: Optional[str] = None
    duplex: Optional[str] = None


# ================================================================
# CONTRATO DE VENDOR
# ================================================================

class OltVendorBase(ABC):
    """
    Clase base abstracta para vendors de OLT.
    Las consultas de estado, señal e info son obligatorias; el resto se
    publica como capacidades opcionales que el llamador debe verificar.

    Uso:
        vendor = registry.resolve("bdcom")
        cmd = vendor.build_status_command("0/8", "15")
        record = vendor.parse_status(raw_output)
        detail = vendor.capability(Capability.ACTIVE_DETAIL)
        if detail:
            partial = detail.parse(raw_detail)
    """

    vendor_name: str = ""
    interface_prefix: str = ""
    privilege_lines: Tuple[str, ...] = ()

    def __init__(self, snippet_limit: int = 500):
        self.snippet_limit = snippet_limit

    def command(self, *lines: str) -> CommandText:
        """Arma el CommandText anteponiendo el escalamiento del vendor."""
        return CommandText(
            lines=tuple(self.privilege_lines) + tuple(lines),
            privilege_count=len(self.privilege_lines),
        )

    # ================================================================
    # ESTADO
    # ================================================================

    @abstractmethod
    def build_status_command(self, port: str, onu_id: str) -> CommandText:
        """Comando para consultar el estado de una ONU."""
        pass

    @abstractmethod
    def parse_status(self, raw: str) -> OnuStatusRecord:
        """
        Parsea la salida del comando de estado.
        Nunca lanza excepción: los fallos quedan en `error`.
        """
        pass

    # ================================================================
    # SEÑAL
    # ================================================================

    @abstractmethod
    def build_signal_command(self, port: str, onu_id: str) -> CommandText:
        """Comando para consultar los niveles ópticos (DDM)."""
        pass

    @abstractmethod
    def parse_signal(self, raw: str) -> SignalLevelRecord:
        """Parsea niveles ópticos. Salida vacía = todos los campos sin valor."""
        pass

    # ================================================================
    # INFO
    # ================================================================

    @abstractmethod
    def build_info_command(self, port: str, onu_id: str) -> CommandText:
        """Comando para información de hardware/firmware."""
        pass

    @abstractmethod
    def parse_info(self, raw: str) -> OnuInfoRecord:
        """Parsea la info de la ONU."""
        pass

    # ================================================================
    # CAPACIDADES OPCIONALES
    # ================================================================

    def _capabilities(self) -> Dict[Capability, CommandPair]:
        """Los vendors sobreescriben esto con lo que soportan."""
        return {}

    def capability(self, cap: Capability) -> Optional[CommandPair]:
        """Regresa la capacidad o None si el vendor no la implementa."""
        return self._capabilities().get(cap)

    def supports(self, cap: Capability) -> bool:
        return cap in self._capabilities()

    def capabilities(self) -> List[Capability]:
        return list(self._capabilities().keys())

    def __repr__(self) -> str:
        return f"<{type(self).__name__} vendor={self.vendor_name}>"
