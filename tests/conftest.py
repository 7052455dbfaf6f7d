"""
Configuración de pytest y fixtures comunes.
"""
import pytest

from olt_monitor.config import Settings
from olt_monitor.services.olt.drivers.bdcom_driver import BdcomVendor
from olt_monitor.services.olt.drivers.zte_driver import ZteVendor
from olt_monitor.services.olt.engine import OltEngine
from olt_monitor.services.olt.olt_factory import build_default_registry


@pytest.fixture
def settings():
    """Settings de prueba (sin leer .env)."""
    return Settings(OLT_DEFAULT_VENDOR="bdcom", OLT_RAW_SNIPPET_LIMIT=500, OLT_FETCH_DETAILS=True)


@pytest.fixture
def bdcom():
    return BdcomVendor()


@pytest.fixture
def zte():
    return ZteVendor()


@pytest.fixture
def registry(settings):
    return build_default_registry(settings)


@pytest.fixture
def engine(registry):
    return OltEngine(registry)
