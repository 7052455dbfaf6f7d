"""
Sistema ISP - Motor de comandos OLT
Punto de entrada para quien habla con la sesión CLI: arma el texto
del comando y parsea la respuesta por (vendor, consulta).
"""
from enum import Enum
from typing import Any

from olt_monitor.services.olt.olt_base import (
    OltVendorBase, CommandText, CommandPair, Capability, UnsupportedQueryError,
    OnuStatusRecord, SignalLevelRecord, OnuInfoRecord,
)
from olt_monitor.services.olt.olt_factory import VendorRegistry


class OltQuery(str, Enum):
    """Consultas que el motor sabe armar y parsear."""
    STATUS = "status"
    SIGNAL = "signal"
    INFO = "info"
    ACTIVE_DETAIL = "active_detail"
    INACTIVE_DETAIL = "inactive_detail"
    CONFIG = "config"
    MAC_TABLE = "mac_table"
    PORT_STATE = "port_state"


# Consultas opcionales → capacidad del vendor
QUERY_CAPABILITIES = {
    OltQuery.ACTIVE_DETAIL: Capability.ACTIVE_DETAIL,
    OltQuery.INACTIVE_DETAIL: Capability.INACTIVE_DETAIL,
    OltQuery.CONFIG: Capability.CONFIG,
    OltQuery.MAC_TABLE: Capability.MAC_TABLE,
    OltQuery.PORT_STATE: Capability.PORT_STATE,
}


class OltEngine:
    """
    Fachada sobre el registro de vendors.

    Uso:
        engine = OltEngine(build_default_registry())
        cmd = engine.build_command("bdcom", OltQuery.STATUS, "0/8", "15")
        record = engine.parse("bdcom", OltQuery.STATUS, raw_output)
    """

    def __init__(self, registry: VendorRegistry):
        self.registry = registry

    def resolve_vendor(self, vendor_key: str) -> OltVendorBase:
        return self.registry.resolve(vendor_key)

    def _pair(self, vendor: OltVendorBase, query: OltQuery) -> CommandPair:
        if query == OltQuery.STATUS:
            return CommandPair(vendor.build_status_command, vendor.parse_status)
        if query == OltQuery.SIGNAL:
            return CommandPair(vendor.build_signal_command, vendor.parse_signal)
        if query == OltQuery.INFO:
            return CommandPair(vendor.build_info_command, vendor.parse_info)

        pair = vendor.capability(QUERY_CAPABILITIES[query])
        if pair is None:
            raise UnsupportedQueryError(
                f"El vendor '{vendor.vendor_name}' no soporta la consulta '{query.value}'"
            )
        return pair

    def supports(self, vendor_key: str, query: OltQuery) -> bool:
        """Indica si el vendor implementa la consulta (las obligatorias siempre)."""
        query = OltQuery(query)
        if query not in QUERY_CAPABILITIES:
            return True
        return self.resolve_vendor(vendor_key).supports(QUERY_CAPABILITIES[query])

    def build_command(self, vendor_key: str, query: OltQuery, port: str, onu_id: str) -> CommandText:
        vendor = self.resolve_vendor(vendor_key)
        return self._pair(vendor, OltQuery(query)).build(port, onu_id)

    def parse(self, vendor_key: str, query: OltQuery, raw: str) -> Any:
        vendor = self.resolve_vendor(vendor_key)
        return self._pair(vendor, OltQuery(query)).parse(raw)

    # ================================================================
    # CONSULTAS OBLIGATORIAS
    # ================================================================

    def build_status_command(self, vendor_key: str, port: str, onu_id: str) -> CommandText:
        return self.build_command(vendor_key, OltQuery.STATUS, port, onu_id)

    def parse_status(self, vendor_key: str, raw: str) -> OnuStatusRecord:
        return self.parse(vendor_key, OltQuery.STATUS, raw)

    def build_signal_command(self, vendor_key: str, port: str, onu_id: str) -> CommandText:
        return self.build_command(vendor_key, OltQuery.SIGNAL, port, onu_id)

    def parse_signal(self, vendor_key: str, raw: str) -> SignalLevelRecord:
        return self.parse(vendor_key, OltQuery.SIGNAL, raw)

    def build_info_command(self, vendor_key: str, port: str, onu_id: str) -> CommandText:
        return self.build_command(vendor_key, OltQuery.INFO, port, onu_id)

    def parse_info(self, vendor_key: str, raw: str) -> OnuInfoRecord:
        return self.parse(vendor_key, OltQuery.INFO, raw)
