"""
Tests de configuración VLAN/SLA, tabla MAC y estado de puerto (BDCOM).
"""
import pytest

from olt_monitor.services.olt.olt_base import Capability
from tests.cli_outputs import BDCOM_CONFIG, BDCOM_MAC_TABLE, BDCOM_PORT_STATE


class TestConfig:
    """running-config de la ONU."""

    def test_command(self, bdcom):
        cmd = bdcom.build_config_command("0/8", "15")
        assert cmd.query_lines == ("show running-config interface epon0/8:15",)

    def test_parse(self, bdcom):
        config = bdcom.parse_config(BDCOM_CONFIG)

        assert config.vlan_mode == "tag"
        assert config.vlan_id == 104
        assert config.priority == 0
        assert config.upstream_sla.pir == 1000000
        assert config.upstream_sla.cir == 512
        assert config.downstream_sla.pir == 1000000
        assert config.downstream_sla.cir == 512

    def test_to_dict_nested(self, bdcom):
        data = bdcom.parse_config(BDCOM_CONFIG).to_dict()
        assert data["upstream_sla"] == {"pir": 1000000, "cir": 512}

    def test_transparent_vlan(self, bdcom):
        config = bdcom.parse_config(" epon onu port 1 ctc vlan mode transparent\n")
        assert config.vlan_mode == "transparent"
        assert config.vlan_id is None
        assert config.upstream_sla is None

    def test_empty(self, bdcom):
        assert bdcom.parse_config("").to_dict() == {}


class TestMacTable:
    """MACs aprendidas detrás de la ONU."""

    def test_command(self, bdcom):
        cmd = bdcom.build_mac_table_command("0/8", "15")
        assert cmd.query_lines == ("show mac address-table interface epon0/8:15",)

    def test_parse(self, bdcom):
        entries = bdcom.parse_mac_table(BDCOM_MAC_TABLE)

        assert len(entries) == 2
        assert entries[0].mac_address == "d8:47:32:1e:d8:0f"
        assert entries[0].vlan == 104
        assert entries[0].type == "DYNAMIC"
        assert entries[1].mac_address == "00:11:22:33:44:55"
        assert entries[1].type == "STATIC"

    def test_empty(self, bdcom):
        assert bdcom.parse_mac_table("") == []
        assert bdcom.parse_mac_table(None) == []


class TestPortState:
    """Estado del puerto Ethernet de la ONU."""

    def test_command(self, bdcom):
        cmd = bdcom.build_port_state_command("0/8", "15")
        assert cmd.query_lines == ("show epon interface epon0/8:15 onu port 1 state",)

    def test_parse(self, bdcom):
        state = bdcom.parse_port_state(BDCOM_PORT_STATE)

        assert state.hardware_state == "Link-Up"
        assert state.speed == "100M"
        assert state.duplex == "Full"

    def test_bare_link_down(self, bdcom):
        state = bdcom.parse_port_state("Link-Down")
        assert state.hardware_state == "Link-Down"
        assert state.speed is None
        assert state.duplex is None

    def test_empty_is_unknown(self, bdcom):
        """Sin salida no se asume Link-Down."""
        assert bdcom.parse_port_state("").hardware_state == "unknown"


class TestCapabilities:
    """BDCOM publica todas las consultas opcionales."""

    def test_all_supported(self, bdcom):
        for cap in Capability:
            assert bdcom.supports(cap)
            assert bdcom.capability(cap) is not None

    def test_capability_pair(self, bdcom):
        pair = bdcom.capability(Capability.MAC_TABLE)
        assert pair.build("0/8", "15").query_lines == ("show mac address-table interface epon0/8:15",)
        assert len(pair.parse(BDCOM_MAC_TABLE)) == 2


class TestDetailLineEndings:
    """running-config y tabla MAC con retornos de carro de telnet."""

    @pytest.mark.parametrize("newline", ["\r\n", "\r\r\n", "\n\r"])
    def test_config(self, bdcom, newline):
        config = bdcom.parse_config(BDCOM_CONFIG.replace("\n", newline))

        assert config.vlan_id == 104
        assert config.priority == 0
        assert config.downstream_sla.cir == 512

    @pytest.mark.parametrize("newline", ["\r\n", "\r\r\n", "\n\r"])
    def test_mac_table(self, bdcom, newline):
        entries = bdcom.parse_mac_table(BDCOM_MAC_TABLE.replace("\n", newline))

        assert [entry.mac_address for entry in entries] == ["d8:47:32:1e:d8:0f", "00:11:22:33:44:55"]
        assert entries[1].type == "STATIC"
