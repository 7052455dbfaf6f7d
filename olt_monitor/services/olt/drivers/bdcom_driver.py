"""
Sistema ISP - Vendor OLT BDCOM (P3310, P3608, GP3600 - EPON)
Implementa comandos CLI y parseo de salida específicos para OLTs BDCOM.

Comandos principales (todos requieren modo enable):
  - show epon onu-information interface epon0/8 15 → Estado ONU
  - show epon active-onu interface epon0/8 15 → Detalle ONU online
  - show epon inactive-onu interface epon0/8 15 → Detalle ONU offline
  - show epon interface epon0/8:15 onu ctc optical-transceiver-diagnosis → Señal
  - show epon interface epon0/8:15 onu ctc basic-info → Info
  - show running-config interface epon0/8:15 → VLAN / SLA
  - show mac address-table interface epon0/8:15 → Tabla MAC
  - show epon interface epon0/8:15 onu port 1 state → Estado del puerto
"""
import re
import logging
from typing import Optional, List, Dict, Any

from olt_monitor.services.olt.olt_base import (
    OltVendorBase, CommandText, Capability, CommandPair,
    OnuStatusRecord, OnuDetailRecord, SignalLevelRecord, OnuInfoRecord,
    OnuConfigRecord, SlaRecord, MacAddressEntry, PortStateRecord,
)
from olt_monitor.services.olt.normalizers import (
    bdcom_mac_to_canonical, normalize_mac, is_na, to_int, snippet,
)
from olt_monitor.services.olt.status_map import OnuState, classify, is_status_keyword
from olt_monitor.services.olt.table_parser import (
    TableRow, find_table_row, first_match, split_lines, tokenize, token_at,
    parse_key_values, match_labeled_numbers, labeled_number,
)

logger = logging.getLogger("olt_bdcom")

INTERFACE_PREFIX = "EPON"

# "EPON0/8:15" → puerto "0/8", ONU "15"
INTERFACE_PATTERN = re.compile(r"EPON(\d+/\d+):(\d+)", re.IGNORECASE)

# Respuestas legítimas sin datos (no son error de parseo)
NO_ONUS_PATTERN = re.compile(
    r"has\s+(?:registered\s+0\s+ONUs|bound\s+0\s+(?:active|inactive)\s+ONUs)",
    re.IGNORECASE,
)
NO_ACTIVE_PATTERN = re.compile(r"has\s+bound\s+0\s+active\s+ONUs", re.IGNORECASE)
NO_INACTIVE_PATTERN = re.compile(r"has\s+bound\s+0\s+inactive\s+ONUs", re.IGNORECASE)

# Línea resumen de la tabla ("Interface EPON0/8 has registered 1 ONUs:")
SUMMARY_LINE = re.compile(r"has\s+(?:registered|bound)\s+\d+", re.IGNORECASE)

BIND_TYPES = ("static", "dynamic")

# Salidas DDM más cortas que esto = ONU sin diagnóstico (offline)
MIN_SIGNAL_OUTPUT = 10

SIGNAL_PATTERNS = {
    "temperature": labeled_number(r"temperature"),
    "voltage": labeled_number(r"voltage"),
    "bias_current": labeled_number(r"bias\s*current"),
    "tx_power": labeled_number(r"(?:transmitted|tx)\s*(?:optical\s*)?power"),
    "rx_power": labeled_number(r"(?:received|rx)\s*(?:optical\s*)?power"),
}

# Claves de "onu ctc basic-info" → (campo, conversor)
INFO_FIELDS = {
    "vendor id": ("vendor_id", str),
    "onu model": ("model_name", str),
    "model": ("model_name", str),
    "onu id(mac address)": ("mac_address", normalize_mac),
    "mac address": ("mac_address", normalize_mac),
    "serial number": ("serial_number", str),
    "sn": ("serial_number", str),
    "hardware version": ("hardware_version", str),
    "software version": ("software_version", str),
    "firmware version": ("firmware_version", str),
    "ip address": ("ip_address", str),
    "vlan": ("vlan", to_int),
    "upstream bandwidth": ("bandwidth_upstream", to_int),
    "downstream bandwidth": ("bandwidth_downstream", to_int),
}

VLAN_PATTERN = re.compile(
    r"ctc\s+vlan\s+mode\s+(\S+)(?:\s+(\d+))?(?:\s+priority\s+(\d+))?",
    re.IGNORECASE,
)
SLA_PATTERN = re.compile(r"sla\s+(upstream|downstream)\b(.*)$", re.IGNORECASE)
PIR_PATTERN = re.compile(r"\bpir\s+(\d+)", re.IGNORECASE)
CIR_PATTERN = re.compile(r"\bcir\s+(\d+)", re.IGNORECASE)

MAC_ROW_PATTERN = re.compile(
    r"^\s*(\d+)\s+([0-9a-f]{4}\.[0-9a-f]{4}\.[0-9a-f]{4}|[0-9a-f]{2}(?:[:\-][0-9a-f]{2}){5})\s+(\S+)",
    re.IGNORECASE,
)

HARDWARE_STATE_PATTERN = re.compile(
    r"(?:hardware|link)\s+(?:state|status)\s*:\s*(\S+)", re.IGNORECASE
)
LINK_TOKEN_PATTERN = re.compile(r"\b(link-up|link-down)\b", re.IGNORECASE)
SPEED_PATTERN = re.compile(r"speed\s*:\s*(\S+)", re.IGNORECASE)
SPEED_TOKEN_PATTERN = re.compile(r"\b(\d+\s*[MG](?:bps)?)\b", re.IGNORECASE)
DUPLEX_PATTERN = re.compile(r"duplex\s*:\s*(\S+)", re.IGNORECASE)
DUPLEX_TOKEN_PATTERN = re.compile(r"\b((?:full|half)-duplex)\b", re.IGNORECASE)


# ================================================================
# ESTRATEGIAS DE PARSEO DEL ESTADO
# Cada una recibe (fila, tokens de la fila, salida cruda) y regresa
# los campos encontrados o None si no aplica.
# ================================================================

def _is_wide_row(tokens: List[str]) -> bool:
    return len(tokens) >= 7 and tokens[-3].lower() in BIND_TYPES


def _status_fields(status_token: str) -> Dict[str, Any]:
    state = classify(status_token)
    if state == OnuState.UNKNOWN:
        logger.warning(f"Estado de ONU desconocido: {status_token}")
    return {"onu_status": status_token, "status": state}


def continuation_line(row: TableRow, tokens: List[str], raw: str) -> Optional[Dict[str, Any]]:
    """
    Formato en dos líneas (terminal angosta):
        EPON0/8:15       PICO     E910       70a5.6add.7e1d N/A
            static   deregistered     power-off

    Si la fila ya trae las columnas completas (formato ancho), la línea
    siguiente solo se acepta cuando inicia con el tipo de bind; así un
    pie como "Total 1 ONUs" no pisa la fila.
    """
    parts = tokenize(row.continuation)
    if not parts:
        return None
    if _is_wide_row(tokens) and parts[0].lower() not in BIND_TYPES:
        return None

    found: Dict[str, Any] = {"bind_type": parts[0]}
    if len(parts) >= 2:
        found.update(_status_fields(parts[1]))
    if len(parts) > 2:
        found["last_dereg_reason"] = " ".join(parts[2:])
    return found


def wide_single_line(row: TableRow, tokens: List[str], raw: str) -> Optional[Dict[str, Any]]:
    """
    Formato en una sola línea (terminal ancha):
        EPON0/8:15  PICO  E910  70a5.6add.7e1d  N/A  static  deregistered  power-off

    La descripción tiene ancho libre, así que las tres últimas columnas
    se cuentan desde el final.
    """
    if not _is_wide_row(tokens):
        return None

    found: Dict[str, Any] = {"bind_type": tokens[-3], "last_dereg_reason": tokens[-1]}
    found.update(_status_fields(tokens[-2]))
    found["description"] = " ".join(tokens[4:-3]) or None
    return found


def status_keyword(row: TableRow, tokens: List[str], raw: str) -> Optional[Dict[str, Any]]:
    """
    Último recurso: busca un token de estado conocido en la salida.
    Siempre regresa algo; solo fija el estado y deja una advertencia.
    """
    found: Dict[str, Any] = {
        "status": OnuState.UNKNOWN,
        "parse_warning": "Incomplete parsing - second line not found",
    }
    for line in split_lines(raw):
        if SUMMARY_LINE.search(line):
            continue
        for token in tokenize(line):
            token = token.strip(",;:")
            if is_status_keyword(token):
                found["status"] = classify(token)
                return found
    return found


STATUS_STRATEGIES = (continuation_line, wide_single_line, status_keyword)


class BdcomVendor(OltVendorBase):
    """
    Vendor para OLTs BDCOM EPON.
    Las tablas se imprimen para humanos: el ancho de la terminal y la
    versión de firmware cambian si una fila sale en una o dos líneas.
    """

    vendor_name = "bdcom"
    interface_prefix = INTERFACE_PREFIX
    privilege_lines = ("enable",)

    def _snippet(self, raw: Optional[str]) -> str:
        return snippet(raw, self.snippet_limit)

    # ================================================================
    # ESTADO
    # ================================================================

    def build_status_command(self, port: str, onu_id: str) -> CommandText:
        return self.command(f"show epon onu-information interface epon{port} {onu_id}")

    def parse_status(self, raw: str) -> OnuStatusRecord:
        """
        Parsea 'show epon onu-information'.

        Formato esperado (la fila puede partirse en 2 líneas):
        Interface EPON0/8 has registered 1 ONUs:
        IntfName         VendorID ModelID    MAC Address    Description
            BindType Status           Dereg Reason
        ---------------- -------- ---------- -------------- ----------------------------
        --- -------- ---------------- -----------------
        EPON0/8:15       PICO     E910       70a5.6add.7e1d N/A
            static   deregistered     power-off
        """
        raw = raw if isinstance(raw, str) else ""
        try:
            return self._parse_status(raw)
        except Exception as e:
            logger.error(f"Error parseando estado ONU BDCOM: {e}")
            return OnuStatusRecord(
                error=f"Parsing error: {e}",
                raw_data={"output_snippet": self._snippet(raw)},
            )

    def _parse_status(self, raw: str) -> OnuStatusRecord:
        record = OnuStatusRecord(raw_data={"output_snippet": self._snippet(raw)})

        if not raw.strip():
            record.error = "ONU not found or not registered"
            logger.warning("Salida vacía - ONU no encontrada")
            return record

        if NO_ONUS_PATTERN.search(raw):
            logger.info("La OLT reporta 0 ONUs en la interfaz")
            return record

        row = find_table_row(raw, INTERFACE_PREFIX)
        if row is None:
            record.error = "Could not find ONU data in output - ONU may not be registered"
            logger.warning("No se encontró fila de datos después del separador")
            return record

        tokens = tokenize(row.primary)
        self._apply_primary(record, tokens)

        strategy, found = first_match(STATUS_STRATEGIES, row, tokens, raw)
        warning = found.pop("parse_warning", None)
        for name, value in found.items():
            setattr(record, name, value)
        if warning:
            record.raw_data["parse_warning"] = warning
            logger.warning(f"Parseo incompleto de estado ONU ({strategy})")

        logger.debug(
            f"Estado ONU parseado ({strategy}): port={record.port}, onu_id={record.onu_id}, "
            f"status={record.status.value}, mac={record.mac_address}"
        )
        return record

    def _apply_primary(self, record: OnuStatusRecord, tokens: List[str]):
        """IntfName VendorID ModelID MAC Description..."""
        intf = token_at(tokens, 0)
        if intf:
            match = INTERFACE_PATTERN.match(intf)
            if match:
                record.port = match.group(1)
                record.onu_id = match.group(2)

        record.vendor_id = token_at(tokens, 1)
        record.model_id = token_at(tokens, 2)
        if record.vendor_id and record.model_id:
            record.onu_type = f"{record.vendor_id} {record.model_id}"

        mac = token_at(tokens, 3)
        if mac:
            record.mac_address = bdcom_mac_to_canonical(mac)

        if len(tokens) > 4:
            record.description = " ".join(tokens[4:])

    # ================================================================
    # DETALLE ONU ONLINE / OFFLINE
    # ================================================================

    def build_active_detail_command(self, port: str, onu_id: str) -> CommandText:
        return self.command(f"show epon active-onu interface epon{port} {onu_id}")

    def parse_active_detail(self, raw: str) -> OnuDetailRecord:
        """
        Parsea 'show epon active-onu'.

        IntfName   MAC Address    Status          OAM Status   Distance(m) RTT(TQ) LastRegTime         LastDeregTime       LastDeregReason Alivetime
        ---------- -------------- --------------- ------------ ----------- ------- ------------------- ------------------- --------------- ------------
        EPON0/8:15 70a5.6add.7e1d auto-configured ctc-oam-oper 1180        728     2000-05-08 18:28:48 2000-05-08 15:44:20 power-off       0  .00:39:31
        """
        return self._parse_detail(raw, NO_ACTIVE_PATTERN, self._fill_active)

    def build_inactive_detail_command(self, port: str, onu_id: str) -> CommandText:
        return self.command(f"show epon inactive-onu interface epon{port} {onu_id}")

    def parse_inactive_detail(self, raw: str) -> OnuDetailRecord:
        """
        Parsea 'show epon inactive-onu'.

        IntfName   MAC Address    Status LastRegTime         LastDeregTime       LastDeregReason Absenttime
        ---------- -------------- ------ ------------------- ------------------- --------------- ------------
        EPON0/8:25 80f7.a607.ce31 lost   2000-02-26 13:48:37 2000-02-26 13:51:37 power-off       72 .05:29:13
        """
        return self._parse_detail(raw, NO_INACTIVE_PATTERN, self._fill_inactive)

    def _parse_detail(self, raw: str, empty_pattern: re.Pattern, fill) -> OnuDetailRecord:
        raw = raw if isinstance(raw, str) else ""
        try:
            record = OnuDetailRecord()
            if not raw.strip() or empty_pattern.search(raw):
                return record

            record.raw_data = {"output_snippet": self._snippet(raw)}
            row = find_table_row(raw, INTERFACE_PREFIX)
            if row is None:
                logger.warning("No se encontró fila de detalle ONU en la salida")
                return record

            parts = tokenize(row.merged)
            logger.debug(f"Detalle ONU ({len(parts)} columnas): {parts}")
            fill(record, parts)
            return record

        except Exception as e:
            logger.error(f"Error parseando detalle ONU BDCOM: {e}")
            return OnuDetailRecord(raw_data={"output_snippet": self._snippet(raw), "error": str(e)})

    def _fill_active(self, record: OnuDetailRecord, parts: List[str]):
        if len(parts) < 10:
            return
        record.oam_status = _value(parts, 3)
        record.distance = to_int(_value(parts, 4))
        record.last_reg_time = _timestamp(parts, 6)
        record.last_dereg_time = _timestamp(parts, 8)
        record.last_dereg_reason = _value(parts, 10)
        if len(parts) > 11:
            record.alive_time = " ".join(parts[11:])

    def _fill_inactive(self, record: OnuDetailRecord, parts: List[str]):
        if len(parts) < 7:
            return
        record.last_reg_time = _timestamp(parts, 3)
        record.last_dereg_time = _timestamp(parts, 5)
        record.last_dereg_reason = _value(parts, 7)
        if len(parts) > 8:
            # En ONUs offline la OLT reporta absent time; se guarda en alive_time
            record.alive_time = " ".join(parts[8:])

    # ================================================================
    # SEÑAL
    # ================================================================

    def build_signal_command(self, port: str, onu_id: str) -> CommandText:
        return self.command(f"show epon interface epon{port}:{onu_id} onu ctc optical-transceiver-diagnosis")

    def parse_signal(self, raw: str) -> SignalLevelRecord:
        """
        Parsea el diagnóstico óptico (DDM):
          operating temperature(degree): 41.95
          supply voltage(V): 3.28
          bias current(mA): 9.54
          transmitted power(DBm): 2.42
          received power(DBm): -22.07
        """
        raw = raw if isinstance(raw, str) else ""
        record = SignalLevelRecord(raw_data={"output_snippet": self._snippet(raw)})

        if len(raw.strip()) < MIN_SIGNAL_OUTPUT:
            logger.debug("Salida DDM vacía - ONU sin diagnóstico")
            return record

        try:
            for name, value in match_labeled_numbers(raw, SIGNAL_PATTERNS).items():
                setattr(record, name, value)
            match = INTERFACE_PATTERN.search(raw)
            if match:
                record.port, record.onu_id = match.group(1), match.group(2)
        except Exception as e:
            logger.error(f"Error parseando señal BDCOM: {e}")
            record.raw_data["error"] = str(e)

        return record

    # ================================================================
    # INFO
    # ================================================================

    def build_info_command(self, port: str, onu_id: str) -> CommandText:
        return self.command(f"show epon interface epon{port}:{onu_id} onu ctc basic-info")

    def parse_info(self, raw: str) -> OnuInfoRecord:
        """
        Parsea 'onu ctc basic-info' (líneas "Clave : valor").
        Las claves desconocidas y los valores N/A se ignoran.
        """
        raw = raw if isinstance(raw, str) else ""
        record = OnuInfoRecord(raw_data={"output_snippet": self._snippet(raw)})
        if not raw.strip():
            return record

        try:
            match = INTERFACE_PATTERN.search(raw)
            if match:
                record.port, record.onu_id = match.group(1), match.group(2)

            for key, value in parse_key_values(raw):
                target = INFO_FIELDS.get(key)
                if target is None or is_na(value):
                    continue
                name, convert = target
                if getattr(record, name) is None:
                    setattr(record, name, convert(value))
        except Exception as e:
            logger.error(f"Error parseando info BDCOM: {e}")
            record.raw_data["error"] = str(e)

        return record

    # ================================================================
    # CONFIGURACIÓN (VLAN / SLA)
    # ================================================================

    def build_config_command(self, port: str, onu_id: str) -> CommandText:
        return self.command(f"show running-config interface epon{port}:{onu_id}")

    def parse_config(self, raw: str) -> OnuConfigRecord:
        """
        Parsea el running-config de la ONU:
        interface EPON0/8:15
         epon onu port 1 ctc vlan mode tag 104 priority 0
         epon sla upstream pir 1000000 cir 512
         epon sla downstream pir 1000000 cir 512
        """
        record = OnuConfigRecord()
        if not isinstance(raw, str) or not raw.strip():
            return record

        try:
            for line in split_lines(raw):
                vlan = VLAN_PATTERN.search(line)
                if vlan and record.vlan_mode is None:
                    record.vlan_mode = vlan.group(1)
                    record.vlan_id = to_int(vlan.group(2))
                    record.priority = to_int(vlan.group(3))
                    continue

                sla = SLA_PATTERN.search(line)
                if sla:
                    rest = sla.group(2)
                    pir, cir = PIR_PATTERN.search(rest), CIR_PATTERN.search(rest)
                    value = SlaRecord(
                        pir=int(pir.group(1)) if pir else None,
                        cir=int(cir.group(1)) if cir else None,
                    )
                    if sla.group(1).lower() == "upstream":
                        record.upstream_sla = value
                    else:
                        record.downstream_sla = value
        except Exception as e:
            logger.error(f"Error parseando configuración BDCOM: {e}")

        return record

    # ================================================================
    # TABLA MAC
    # ================================================================

    def build_mac_table_command(self, port: str, onu_id: str) -> CommandText:
        return self.command(f"show mac address-table interface epon{port}:{onu_id}")

    def parse_mac_table(self, raw: str) -> List[MacAddressEntry]:
        """
        Parsea la tabla MAC aprendida detrás de la ONU:
        Vlan    Mac Address       Type       Ports
        ----    -----------       ----       -----
        104     d847.321e.d80f    DYNAMIC    epon0/8:15
        """
        entries: List[MacAddressEntry] = []
        if not isinstance(raw, str):
            return entries

        try:
            for line in split_lines(raw):
                match = MAC_ROW_PATTERN.match(line)
                if not match:
                    continue
                entries.append(MacAddressEntry(
                    mac_address=normalize_mac(match.group(2)),
                    vlan=int(match.group(1)),
                    type=match.group(3),
                ))
        except Exception as e:
            logger.error(f"Error parseando tabla MAC BDCOM: {e}")

        return entries

    # ================================================================
    # ESTADO DEL PUERTO
    # ================================================================

    def build_port_state_command(self, port: str, onu_id: str) -> CommandText:
        return self.command(f"show epon interface epon{port}:{onu_id} onu port 1 state")

    def parse_port_state(self, raw: str) -> PortStateRecord:
        """
        Parsea el estado del puerto Ethernet de la ONU.
        Sin salida → hardware_state "unknown" (no es lo mismo que Link-Down).
        """
        record = PortStateRecord()
        if not isinstance(raw, str) or not raw.strip():
            return record

        try:
            match = HARDWARE_STATE_PATTERN.search(raw) or LINK_TOKEN_PATTERN.search(raw)
            if match:
                record.hardware_state = match.group(1)

            match = SPEED_PATTERN.search(raw) or SPEED_TOKEN_PATTERN.search(raw)
            if match:
                record.speed = match.group(1)

            match = DUPLEX_PATTERN.search(raw) or DUPLEX_TOKEN_PATTERN.search(raw)
            if match:
                record.duplex = match.group(1)
        except Exception as e:
            logger.error(f"Error parseando estado de puerto BDCOM: {e}")

        return record

    # ================================================================
    # CAPACIDADES
    # ================================================================

    def _capabilities(self) -> Dict[Capability, CommandPair]:
        return {
            Capability.ACTIVE_DETAIL: CommandPair(self.build_active_detail_command, self.parse_active_detail),
            Capability.INACTIVE_DETAIL: CommandPair(self.build_inactive_detail_command, self.parse_inactive_detail),
            Capability.CONFIG: CommandPair(self.build_config_command, self.parse_config),
            Capability.MAC_TABLE: CommandPair(self.build_mac_table_command, self.parse_mac_table),
            Capability.PORT_STATE: CommandPair(self.build_port_state_command, self.parse_port_state),
        }


def _value(parts: List[str], index: int) -> Optional[str]:
    """Token de la columna o None si falta o es N/A."""
    token = token_at(parts, index)
    return None if is_na(token) else token


def _timestamp(parts: List[str], index: int) -> Optional[str]:
    """Fecha y hora ocupan dos columnas ("2000-05-08 18:28:48")."""
    date, time = _value(parts, index), _value(parts, index + 1)
    if date and time:
        return f"{date} {time}"
    return None
