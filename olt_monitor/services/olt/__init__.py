"""
Sistema ISP - OLT Integration
Vendors multi-marca: arman comandos CLI y parsean su salida.
Marcas soportadas: BDCOM, ZTE.
"""
from olt_monitor.services.olt.olt_base import (
    OltError,
    UnsupportedVendorError,
    UnsupportedQueryError,
    OltVendorBase,
    CommandText,
    Capability,
    OnuStatusRecord,
    OnuDetailRecord,
    SignalLevelRecord,
    OnuInfoRecord,
    OnuConfigRecord,
    MacAddressEntry,
    PortStateRecord,
)
from olt_monitor.services.olt.status_map import OnuState, classify
from olt_monitor.services.olt.normalizers import normalize_mac, parse_epon_interface
from olt_monitor.services.olt.merge import merge_onu_details
from olt_monitor.services.olt.olt_factory import VendorRegistry, build_default_registry
from olt_monitor.services.olt.engine import OltEngine, OltQuery
from olt_monitor.services.olt.onu_service import OnuMonitorService

__all__ = [
    "OltError",
    "UnsupportedVendorError",
    "UnsupportedQueryError",
    "OltVendorBase",
    "CommandText",
    "Capability",
    "OnuStatusRecord",
    "OnuDetailRecord",
    "SignalLevelRecord",
    "OnuInfoRecord",
    "OnuConfigRecord",
    "MacAddressEntry",
    "PortStateRecord",
    "OnuState",
    "classify",
    "normalize_mac",
    "parse_epon_interface",
    "merge_onu_details",
    "VendorRegistry",
    "build_default_registry",
    "OltEngine",
    "OltQuery",
    "OnuMonitorService",
]
