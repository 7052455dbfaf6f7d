"""
Sistema ISP - OLT Vendor Registry
Resuelve la marca de OLT (o "auto") al vendor que sabe armar sus
comandos y parsear su salida. Se construye una vez al arrancar y
se pasa explícitamente a quien lo necesite.
"""
import logging
from typing import Dict, List, Optional

from olt_monitor.config import Settings, get_settings
from olt_monitor.services.olt.olt_base import OltVendorBase, OltError, UnsupportedVendorError
from olt_monitor.services.olt.drivers.bdcom_driver import BdcomVendor
from olt_monitor.services.olt.drivers.zte_driver import ZteVendor

logger = logging.getLogger("olt_factory")

AUTO_VENDOR = "auto"

# Vendors disponibles
VENDORS = {
    "bdcom": BdcomVendor,
    "zte": ZteVendor,
    # Futuros vendors:
    # "huawei": HuaweiVendor,
}

# Aliases de marcas (para que el operador no tenga que escribir exacto)
BRAND_ALIASES = {
    "bdcom": "bdcom",
    "p3310": "bdcom",
    "p3310c": "bdcom",
    "p3608": "bdcom",
    "gp3600": "bdcom",
    "zte": "zte",
    "zxa10": "zte",
    "c300": "zte",
    "c320": "zte",
    "c600": "zte",
    "huawei": "huawei",
    "hw": "huawei",
    "ma5608t": "huawei",
    "ma5800": "huawei",
}


class VendorRegistry:
    """
    Registro de vendors OLT por clave en minúsculas.

    Uso:
        registry = build_default_registry()
        vendor = registry.resolve("BDCOM")
    """

    def __init__(self, default_vendor: str = "bdcom", aliases: Optional[Dict[str, str]] = None):
        self.default_vendor = default_vendor.lower().strip()
        self._aliases = dict(BRAND_ALIASES if aliases is None else aliases)
        self._vendors: Dict[str, OltVendorBase] = {}

    def register(self, vendor: OltVendorBase):
        """Agrega un vendor; el último registrado con la misma clave gana."""
        key = vendor.vendor_name.lower().strip()
        if not key or key == AUTO_VENDOR:
            raise OltError(f"Clave de vendor inválida: '{vendor.vendor_name}'")
        self._vendors[key] = vendor

    def normalize_key(self, key: str) -> str:
        """Aplica "auto" → vendor por defecto y los aliases de marca."""
        normalized = (key or "").lower().strip()
        if normalized == AUTO_VENDOR:
            logger.debug(f"Auto-detección solicitada, usando {self.default_vendor}")
            normalized = self.default_vendor
        return self._aliases.get(normalized, normalized)

    def resolve(self, key: str) -> OltVendorBase:
        """
        Regresa el vendor para la clave indicada.

        Raises:
            UnsupportedVendorError: con la lista de vendors registrados
        """
        vendor = self._vendors.get(self.normalize_key(key))
        if vendor is None:
            raise UnsupportedVendorError(key, self.list_supported())
        return vendor

    def is_supported(self, key: str) -> bool:
        return self.normalize_key(key) in self._vendors

    def list_supported(self) -> List[str]:
        return list(self._vendors.keys())

    def __len__(self) -> int:
        return len(self._vendors)


def build_default_registry(settings: Optional[Settings] = None) -> VendorRegistry:
    """Crea el registro con todos los vendors disponibles."""
    settings = settings or get_settings()
    registry = VendorRegistry(default_vendor=settings.OLT_DEFAULT_VENDOR)

    for vendor_class in VENDORS.values():
        registry.register(vendor_class(snippet_limit=settings.OLT_RAW_SNIPPET_LIMIT))

    logger.info(
        f"{settings.APP_NAME} v{settings.APP_VERSION}: registro de vendors OLT "
        f"inicializado con {len(registry)} vendor(s): "
        f"{', '.join(registry.list_supported())}"
    )
    return registry
