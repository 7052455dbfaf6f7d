"""
Tests de 'show epon active-onu' / 'show epon inactive-onu' (BDCOM).
"""
import pytest

from tests.cli_outputs import BDCOM_ACTIVE, BDCOM_INACTIVE


ACTIVE_HEADER = """Interface EPON0/8 has bound 1 active ONUs:
IntfName         MAC Address    Status           OAM Status   Distance(m) RTT(TQ) LastRegTime         LastDeregTime       LastDeregReason   Alivetime
---------------- -------------- ---------------- ------------ ----------- ------- ------------------- ------------------- ----------------- ------------
"""


class TestActiveDetail:
    """Detalle de ONU online."""

    def test_command(self, bdcom):
        cmd = bdcom.build_active_detail_command("0/8", "15")
        assert cmd.query_lines == ("show epon active-onu interface epon0/8 15",)

    def test_parse(self, bdcom):
        detail = bdcom.parse_active_detail(BDCOM_ACTIVE)

        assert detail.oam_status == "ctc-oam-oper"
        assert detail.distance == 1180
        assert detail.last_reg_time == "2000-05-08 18:28:48"
        assert detail.last_dereg_time == "2000-05-08 15:44:20"
        assert detail.last_dereg_reason == "power-off"
        assert detail.alive_time == "0 .00:39:31"
        assert "output_snippet" in detail.raw_data

    def test_wrapped_row(self, bdcom):
        """La columna Alivetime puede caer en la línea siguiente."""
        raw = ACTIVE_HEADER + (
            "EPON0/8:15       70a5.6add.7e1d auto-configured  ctc-oam-oper 1180        728     "
            "2000-05-08 18:28:48 2000-05-08 15:44:20 power-off\n"
            "                 0  .00:39:31\n"
        )
        detail = bdcom.parse_active_detail(raw)
        assert detail.distance == 1180
        assert detail.alive_time == "0 .00:39:31"

    def test_na_columns_skipped(self, bdcom):
        raw = ACTIVE_HEADER + (
            "EPON0/8:15       70a5.6add.7e1d auto-configured  ctc-oam-oper 950         500     "
            "2000-05-08 18:28:48 N/A N/A N/A 0 .01:00:00\n"
        )
        detail = bdcom.parse_active_detail(raw)

        assert detail.distance == 950
        assert detail.last_reg_time == "2000-05-08 18:28:48"
        assert detail.last_dereg_time is None
        assert detail.last_dereg_reason is None

    def test_zero_active(self, bdcom):
        detail = bdcom.parse_active_detail("Interface EPON0/8 has bound 0 active ONUs")
        assert detail.distance is None
        assert detail.raw_data == {}

    def test_empty(self, bdcom):
        detail = bdcom.parse_active_detail("")
        assert detail.to_dict() == {"raw_data": {}}

    def test_short_row(self, bdcom):
        """Menos columnas de las esperadas: no se llena nada."""
        detail = bdcom.parse_active_detail(ACTIVE_HEADER + "EPON0/8:15 70a5.6add.7e1d auto-configured\n")
        assert detail.oam_status is None
        assert detail.distance is None


class TestInactiveDetail:
    """Detalle de ONU offline."""

    def test_command(self, bdcom):
        cmd = bdcom.build_inactive_detail_command("0/8", "15")
        assert cmd.query_lines == ("show epon inactive-onu interface epon0/8 15",)

    def test_parse(self, bdcom):
        detail = bdcom.parse_inactive_detail(BDCOM_INACTIVE)

        assert detail.last_reg_time == "2000-02-26 13:48:37"
        assert detail.last_dereg_time == "2000-02-26 13:51:37"
        assert detail.last_dereg_reason == "power-off"
        assert detail.alive_time == "72 .05:29:13"
        assert detail.distance is None
        assert detail.oam_status is None

    def test_zero_inactive(self, bdcom):
        detail = bdcom.parse_inactive_detail("Interface EPON0/8 has bound 0 inactive ONUs")
        assert detail.last_reg_time is None
        assert detail.raw_data == {}


class TestDetailLineEndings:
    """Salida de telnet con retornos de carro junto a cada salto."""

    @pytest.mark.parametrize("newline", ["\r\n", "\r\r\n", "\n\r"])
    def test_active(self, bdcom, newline):
        detail = bdcom.parse_active_detail(BDCOM_ACTIVE.replace("\n", newline))

        assert detail.distance == 1180
        assert detail.last_dereg_reason == "power-off"
        assert detail.alive_time == "0 .00:39:31"

    @pytest.mark.parametrize("newline", ["\r\n", "\r\r\n", "\n\r"])
    def test_active_wrapped_row(self, bdcom, newline):
        raw = ACTIVE_HEADER + (
            "EPON0/8:15       70a5.6add.7e1d auto-configured  ctc-oam-oper 1180        728     "
            "2000-05-08 18:28:48 2000-05-08 15:44:20 power-off\n"
            "                 0  .00:39:31\n"
        )
        detail = bdcom.parse_active_detail(raw.replace("\n", newline))

        assert detail.distance == 1180
        assert detail.alive_time == "0 .00:39:31"

    @pytest.mark.parametrize("newline", ["\r\n", "\r\r\n", "\n\r"])
    def test_inactive(self, bdcom, newline):
        detail = bdcom.parse_inactive_detail(BDCOM_INACTIVE.replace("\n", newline))

        assert detail.last_dereg_time == "2000-02-26 13:51:37"
        assert detail.alive_time == "72 .05:29:13"
