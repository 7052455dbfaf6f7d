"""
Tests de normalizadores de campos y tabla de estados.
"""
import pytest

from olt_monitor.services.olt.olt_base import OltError
from olt_monitor.services.olt.normalizers import (
    normalize_mac, bdcom_mac_to_canonical, parse_epon_interface,
    is_na, to_int, to_float, snippet,
)
from olt_monitor.services.olt.status_map import OnuState, classify, is_status_keyword


class TestNormalizeMac:
    """Tests de normalización de MAC."""

    @pytest.mark.parametrize("raw", [
        "70a5.6add.7e1d",
        "70:a5:6a:dd:7e:1d",
        "70-A5-6A-DD-7E-1D",
        "70A56ADD7E1D",
        " 70a5.6add.7e1d ",
    ])
    def test_formats_to_canonical(self, raw):
        assert normalize_mac(raw) == "70:a5:6a:dd:7e:1d"

    @pytest.mark.parametrize("raw", [
        "70a5.6add.7e1d",
        "d847.321e.d80f",
        "N/A",
        "70a5.6add",
        "",
    ])
    def test_idempotent(self, raw):
        once = normalize_mac(raw)
        assert normalize_mac(once) == once

    def test_invalid_passthrough(self):
        """Lo que no son 12 hex se regresa igual."""
        assert normalize_mac("N/A") == "N/A"
        assert normalize_mac("70a5.6add") == "70a5.6add"
        assert normalize_mac(None) == ""

    def test_bdcom_mac_only_dotted(self):
        """En la tabla BDCOM solo se convierte el formato con puntos."""
        assert bdcom_mac_to_canonical("70a5.6add.7e1d") == "70:a5:6a:dd:7e:1d"
        assert bdcom_mac_to_canonical("70a56add7e1d") == "70a56add7e1d"


class TestParseInterface:
    """Tests de parseo de interfaz de ONU."""

    @pytest.mark.parametrize("interface,expected", [
        ("epon0/1:4", ("0/1", "4")),
        ("EPON0/8:15", ("0/8", "15")),
        ("0/1:2", ("0/1", "2")),
        (" epon0/1:4 ", ("0/1", "4")),
        ("gpon-onu_1/2/1:3", ("2/1", "3")),
    ])
    def test_valid(self, interface, expected):
        assert parse_epon_interface(interface) == expected

    @pytest.mark.parametrize("interface", ["epon0/1", "", "0/1:", ":4", "0/1:2:3"])
    def test_invalid(self, interface):
        with pytest.raises(OltError):
            parse_epon_interface(interface)


class TestCoercion:
    """Tests de helpers numéricos."""

    def test_to_int(self):
        assert to_int("1180") == 1180
        assert to_int("1180m") == 1180
        assert to_int("N/A") is None
        assert to_int(None) is None

    def test_to_float(self):
        assert to_float("-22.07") == -22.07
        assert to_float("abc") is None

    def test_is_na(self):
        assert is_na("N/A")
        assert is_na("n/a")
        assert is_na("")
        assert is_na(None)
        assert not is_na("power-off")
        assert not is_na(0)

    def test_snippet_bounded(self):
        assert len(snippet("x" * 1000)) == 500
        assert snippet(None) == ""


class TestStatusClassification:
    """Tests de la tabla de clasificación de estados."""

    def test_case_insensitive(self):
        assert classify("AUTO-CONFIGURED") == OnuState.ONLINE
        assert classify("auto-configured") == OnuState.ONLINE
        assert classify("deregistered") == OnuState.OFFLINE
        assert classify("Lost") == OnuState.OFFLINE

    def test_zte_phase_states(self):
        assert classify("working") == OnuState.ONLINE
        assert classify("LOS") == OnuState.OFFLINE
        assert classify("DyingGasp") == OnuState.OFFLINE

    def test_total(self):
        """Cualquier token desconocido es UNKNOWN, nunca excepción."""
        assert classify("garbage") == OnuState.UNKNOWN
        assert classify("") == OnuState.UNKNOWN
        assert classify(None) == OnuState.UNKNOWN

    def test_is_status_keyword(self):
        assert is_status_keyword("registered")
        assert not is_status_keyword("static")
