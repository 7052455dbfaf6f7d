"""
Sistema ISP - Vendor OLT ZTE (ZXA10 C300, C320, C600 - GPON)
Implementa comandos CLI y parseo de salida específicos para OLTs ZTE.

Comandos principales:
  - show gpon onu state gpon-olt_1/X/X N → Estado ONU
  - show gpon onu optical-info gpon-onu_1/X/X:N → Señal óptica
  - show gpon onu detail-info gpon-onu_1/X/X:N → Info
"""
import re
import logging
from typing import Optional

from olt_monitor.services.olt.olt_base import (
    OltVendorBase, CommandText, OnuStatusRecord, SignalLevelRecord, OnuInfoRecord,
)
from olt_monitor.services.olt.normalizers import is_na, snippet
from olt_monitor.services.olt.status_map import OnuState, classify, is_status_keyword
from olt_monitor.services.olt.table_parser import (
    split_lines, tokenize, parse_key_values, match_labeled_numbers, labeled_number,
)

logger = logging.getLogger("olt_zte")

# Rack fijo: las OLTs ZTE del ISP son de un solo shelf
RACK = 1

# "1/2/1:3  enable  enable  working  1(GPON)" o "gpon-onu_1/2/1:3 ..."
STATE_ROW_PATTERN = re.compile(
    r"^\s*(?:gpon-onu_)?(\d+)/(\d+)/(\d+):(\d+)\s+(\S+)\s+(\S+)\s+(\S+)",
    re.IGNORECASE,
)
ONU_REF_PATTERN = re.compile(r"gpon-onu_\d+/(\d+/\d+):(\d+)", re.IGNORECASE)
NOT_FOUND_PATTERN = re.compile(r"no related information|onu is not exist|invalid", re.IGNORECASE)

SIGNAL_PATTERNS = {
    "rx_power": labeled_number(r"rx\s*(?:optical\s*)?power"),
    "tx_power": labeled_number(r"tx\s*(?:optical\s*)?power"),
    "temperature": labeled_number(r"temperature"),
    "voltage": labeled_number(r"voltage"),
    "bias_current": labeled_number(r"bias\s*current"),
}

MIN_SIGNAL_OUTPUT = 10


class ZteVendor(OltVendorBase):
    """
    Vendor para OLTs ZTE GPON.
    Solo implementa las consultas obligatorias del contrato.
    """

    vendor_name = "zte"
    interface_prefix = "gpon-onu_"

    def _onu_ref(self, port: str, onu_id: str) -> str:
        return f"gpon-onu_{RACK}/{port}:{onu_id}"

    # ================================================================
    # ESTADO
    # ================================================================

    def build_status_command(self, port: str, onu_id: str) -> CommandText:
        return self.command(f"show gpon onu state gpon-olt_{RACK}/{port} {onu_id}")

    def parse_status(self, raw: str) -> OnuStatusRecord:
        """
        Parsea 'show gpon onu state':
        OnuIndex   Admin State  OMCC State  Phase State  Channel
        --------------------------------------------------------------
        1/2/1:3    enable       enable      working      1(GPON)
        """
        raw = raw if isinstance(raw, str) else ""
        record = OnuStatusRecord(raw_data={"output_snippet": snippet(raw, self.snippet_limit)})

        try:
            if not raw.strip():
                record.error = "ONU not found or not registered"
                return record

            for line in split_lines(raw):
                match = STATE_ROW_PATTERN.match(line)
                if not match:
                    continue
                record.port = f"{match.group(2)}/{match.group(3)}"
                record.onu_id = match.group(4)
                record.raw_data["admin_state"] = match.group(5)
                record.raw_data["omcc_state"] = match.group(6)
                record.onu_status = match.group(7)
                record.status = classify(match.group(7))
                if record.status == OnuState.UNKNOWN:
                    logger.warning(f"Phase state desconocido: {match.group(7)}")
                return record

            if NOT_FOUND_PATTERN.search(raw):
                record.error = "ONU not found or not registered"
                return record

            keyword = self._find_keyword(raw)
            if keyword:
                record.status = classify(keyword)
                record.raw_data["parse_warning"] = "State row not found - status taken from keyword"
                return record

            record.error = "Could not find ONU data in output - ONU may not be registered"
            return record

        except Exception as e:
            logger.error(f"Error parseando estado ONU ZTE: {e}")
            return OnuStatusRecord(
                error=f"Parsing error: {e}",
                raw_data={"output_snippet": snippet(raw, self.snippet_limit)},
            )

    def _find_keyword(self, raw: str) -> Optional[str]:
        for token in tokenize(raw):
            if is_status_keyword(token):
                return token
        return None

    # ================================================================
    # SEÑAL
    # ================================================================

    def build_signal_command(self, port: str, onu_id: str) -> CommandText:
        return self.command(f"show gpon onu optical-info {self._onu_ref(port, onu_id)}")

    def parse_signal(self, raw: str) -> SignalLevelRecord:
        """
        Parsea 'show gpon onu optical-info'.
        Busca Rx Power, Tx Power, temperatura, voltaje y corriente de bias.
        """
        raw = raw if isinstance(raw, str) else ""
        record = SignalLevelRecord(raw_data={"output_snippet": snippet(raw, self.snippet_limit)})
        if len(raw.strip()) < MIN_SIGNAL_OUTPUT:
            return record

        try:
            for name, value in match_labeled_numbers(raw, SIGNAL_PATTERNS).items():
                setattr(record, name, value)
            match = ONU_REF_PATTERN.search(raw)
            if match:
                record.port, record.onu_id = match.group(1), match.group(2)
        except Exception as e:
            logger.error(f"Error parseando señal ZTE: {e}")
            record.raw_data["error"] = str(e)

        return record

    # ================================================================
    # INFO
    # ================================================================

    def build_info_command(self, port: str, onu_id: str) -> CommandText:
        return self.command(f"show gpon onu detail-info {self._onu_ref(port, onu_id)}")

    def parse_info(self, raw: str) -> OnuInfoRecord:
        """
        Parsea 'show gpon onu detail-info':
        ONU interface:          gpon-onu_1/2/1:3
        Type:                   ZTE-F660
        Serial number:          ZTEGC8A12345
        ONU Distance:           1180m
        """
        raw = raw if isinstance(raw, str) else ""
        record = OnuInfoRecord(raw_data={"output_snippet": snippet(raw, self.snippet_limit)})
        if not raw.strip():
            return record

        try:
            for key, value in parse_key_values(raw):
                if is_na(value):
                    continue
                if key == "onu interface":
                    match = ONU_REF_PATTERN.search(value)
                    if match:
                        record.port, record.onu_id = match.group(1), match.group(2)
                elif key == "type":
                    record.model_name = value
                elif key == "serial number":
                    record.serial_number = value
                    record.vendor_id = value[:4]
                elif key in ("version", "software version"):
                    record.software_version = value
                elif key == "name":
                    record.raw_data["name"] = value
                elif key == "onu distance":
                    record.raw_data["distance"] = value
        except Exception as e:
            logger.error(f"Error parseando info ZTE: {e}")
            record.raw_data["error"] = str(e)

        return record
