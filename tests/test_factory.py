"""
Tests del registro de vendors OLT.
"""
import logging

import pytest

from olt_monitor.config import Settings
from olt_monitor.services.olt.olt_base import OltError, UnsupportedVendorError
from olt_monitor.services.olt.olt_factory import VendorRegistry, build_default_registry
from olt_monitor.services.olt.drivers.bdcom_driver import BdcomVendor
from olt_monitor.services.olt.drivers.zte_driver import ZteVendor


class AutoVendor(BdcomVendor):
    vendor_name = "auto"


class TestResolve:
    """Resolución de claves de vendor."""

    def test_case_insensitive(self, registry):
        assert registry.resolve("BDCOM") is registry.resolve("bdcom")
        assert registry.resolve(" Bdcom ").vendor_name == "bdcom"

    def test_auto_uses_default(self, registry):
        assert registry.resolve("auto") is registry.resolve("bdcom")
        assert registry.resolve("AUTO").vendor_name == "bdcom"

    def test_auto_with_other_default(self):
        registry = build_default_registry(Settings(OLT_DEFAULT_VENDOR="zte"))
        assert registry.resolve("auto").vendor_name == "zte"

    @pytest.mark.parametrize("alias,expected", [
        ("p3310", "bdcom"),
        ("GP3600", "bdcom"),
        ("c320", "zte"),
        ("ZXA10", "zte"),
    ])
    def test_brand_aliases(self, registry, alias, expected):
        assert registry.resolve(alias).vendor_name == expected

    @pytest.mark.parametrize("key", ["unknown-brand", "huawei", "", None])
    def test_unsupported(self, registry, key):
        with pytest.raises(UnsupportedVendorError) as exc:
            registry.resolve(key)
        assert exc.value.supported == ["bdcom", "zte"]
        assert "bdcom" in str(exc.value)
        assert "zte" in str(exc.value)

    def test_unsupported_is_olt_error(self, registry):
        with pytest.raises(OltError):
            registry.resolve("fiberhome")


class TestRegister:
    """Alta de vendors."""

    def test_last_registration_wins(self):
        registry = VendorRegistry()
        first, second = BdcomVendor(), BdcomVendor()
        registry.register(first)
        registry.register(second)

        assert len(registry) == 1
        assert registry.resolve("bdcom") is second

    def test_auto_key_rejected(self):
        with pytest.raises(OltError):
            VendorRegistry().register(AutoVendor())

    def test_is_supported(self, registry):
        assert registry.is_supported("zte")
        assert registry.is_supported("c600")
        assert not registry.is_supported("huawei")

    def test_list_supported(self, registry):
        assert registry.list_supported() == ["bdcom", "zte"]

    def test_snippet_limit_from_settings(self):
        registry = build_default_registry(Settings(OLT_RAW_SNIPPET_LIMIT=50))
        record = registry.resolve("bdcom").parse_status("x" * 200)
        assert len(record.raw_data["output_snippet"]) == 50

    def test_custom_aliases(self):
        registry = VendorRegistry(aliases={"mi-olt": "zte"})
        registry.register(ZteVendor())
        assert registry.resolve("mi-olt").vendor_name == "zte"


class TestRegistryLogging:
    """El arranque del registro se reporta con el nombre de la app."""

    def test_init_log(self, caplog):
        settings = Settings(APP_NAME="NOC Norte", APP_VERSION="2.3.0")
        with caplog.at_level(logging.INFO, logger="olt_factory"):
            build_default_registry(settings)

        assert "NOC Norte v2.3.0" in caplog.text
        assert "bdcom, zte" in caplog.text
