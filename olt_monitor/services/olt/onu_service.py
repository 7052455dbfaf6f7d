"""
Sistema ISP - Servicio de consulta de ONUs
Orquesta el flujo completo sobre una sesión CLI ya autenticada:

1. Comando principal de estado (show epon onu-information).
2. Según el estado, comando secundario:
   - Online: active-onu (distancia, OAM, alive time)
   - Offline: inactive-onu (últimos reg/dereg, absent time)
3. Fusiona todo en un solo registro.

La sesión (login, prompts, timeouts, reintentos) no vive aquí: se recibe
un `executor` async que ejecuta líneas de comando y regresa la salida
de cada una. Los errores de transporte deben llegar como OltError.
"""
import time
import logging
from datetime import datetime, timezone
from typing import Optional, List, Dict, Any, Callable, Awaitable, Sequence

from olt_monitor.config import Settings, get_settings
from olt_monitor.schemas.olt import OnuQueryRequest, OltQueryResponse
from olt_monitor.services.olt.olt_base import (
    OltVendorBase, OltError, CommandText, Capability, OnuStatusRecord,
)
from olt_monitor.services.olt.engine import OltEngine
from olt_monitor.services.olt.merge import merge_onu_details
from olt_monitor.services.olt.normalizers import parse_epon_interface
from olt_monitor.services.olt.status_map import OnuState

logger = logging.getLogger("onu_service")

# (líneas de comando) -> salida cruda por línea
CommandExecutor = Callable[[Sequence[str]], Awaitable[List[str]]]

# Consultas de detalle de ONU y la clave con la que se reportan
DETAIL_CAPABILITIES = (
    (Capability.CONFIG, "config"),
    (Capability.MAC_TABLE, "mac_addresses"),
    (Capability.PORT_STATE, "port_state"),
)


class OnuMonitorService:
    """
    Consultas de alto nivel sobre una ONU.

    Uso:
        service = OnuMonitorService(OltEngine(registry), executor)
        result = await service.get_onu_status(
            OnuQueryRequest(interface="epon0/8:15", vendor_type="bdcom")
        )
    """

    def __init__(
        self,
        engine: OltEngine,
        executor: CommandExecutor,
        settings: Optional[Settings] = None
    ):
        self.engine = engine
        self.executor = executor
        self.settings = settings or get_settings()

    # ================================================================
    # ESTADO
    # ================================================================

    async def get_onu_status(self, request: OnuQueryRequest) -> OltQueryResponse:
        """Estado de la ONU enriquecido con el detalle active/inactive."""
        started = time.monotonic()

        try:
            port, onu_id = parse_epon_interface(request.interface)
            vendor = self.engine.resolve_vendor(request.vendor_type)
            raw = await self._run(vendor.build_status_command(port, onu_id))
        except OltError as e:
            logger.error(f"Error obteniendo estado de ONU {request.interface}: {e}")
            return self._fail(started, str(e))

        record = vendor.parse_status(raw)
        if record.error:
            return self._fail(started, record.error)

        record.port = record.port or port
        record.onu_id = record.onu_id or onu_id

        if self.settings.OLT_FETCH_DETAILS:
            record = await self._enrich(vendor, record, port, onu_id)

        logger.debug(
            f"Estado ONU {request.interface}: status={record.status.value}, "
            f"distance={record.distance}, alive_time={record.alive_time}"
        )
        return self._ok(started, record.to_dict())

    async def _enrich(
        self,
        vendor: OltVendorBase,
        record: OnuStatusRecord,
        port: str,
        onu_id: str
    ) -> OnuStatusRecord:
        """Pide active-onu o inactive-onu según el estado y fusiona."""
        if record.status == OnuState.ONLINE:
            capability = Capability.ACTIVE_DETAIL
        elif record.status == OnuState.OFFLINE:
            capability = Capability.INACTIVE_DETAIL
        else:
            return record

        detail = vendor.capability(capability)
        if detail is None:
            return record

        try:
            raw = await self._run(detail.build(port, onu_id))
        except OltError as e:
            # El detalle es complementario; no se falla la consulta
            logger.warning(f"No se pudo obtener {capability.value} de ONU {port}:{onu_id}: {e}")
            return record

        return merge_onu_details(record, detail.parse(raw))

    # ================================================================
    # SEÑAL E INFO
    # ================================================================

    async def get_signal_level(self, request: OnuQueryRequest) -> OltQueryResponse:
        """Niveles ópticos de la ONU."""
        started = time.monotonic()

        try:
            port, onu_id = parse_epon_interface(request.interface)
            vendor = self.engine.resolve_vendor(request.vendor_type)
            raw = await self._run(vendor.build_signal_command(port, onu_id))
        except OltError as e:
            logger.error(f"Error obteniendo señal de ONU {request.interface}: {e}")
            return self._fail(started, str(e))

        record = vendor.parse_signal(raw)
        record.port = record.port or port
        record.onu_id = record.onu_id or onu_id
        return self._ok(started, record.to_dict())

    async def get_onu_info(self, request: OnuQueryRequest) -> OltQueryResponse:
        """Información de hardware/firmware de la ONU."""
        started = time.monotonic()

        try:
            port, onu_id = parse_epon_interface(request.interface)
            vendor = self.engine.resolve_vendor(request.vendor_type)
            raw = await self._run(vendor.build_info_command(port, onu_id))
        except OltError as e:
            logger.error(f"Error obteniendo info de ONU {request.interface}: {e}")
            return self._fail(started, str(e))

        record = vendor.parse_info(raw)
        record.port = record.port or port
        record.onu_id = record.onu_id or onu_id
        return self._ok(started, record.to_dict())

    # ================================================================
    # DETALLES (VLAN/SLA, TABLA MAC, PUERTO)
    # ================================================================

    async def get_onu_details(self, request: OnuQueryRequest) -> OltQueryResponse:
        """
        Configuración, MACs aprendidas y estado del puerto.
        Solo se consulta lo que el vendor soporta; si una consulta falla
        se omite y se reporta el resto.
        """
        started = time.monotonic()

        try:
            port, onu_id = parse_epon_interface(request.interface)
            vendor = self.engine.resolve_vendor(request.vendor_type)
        except OltError as e:
            return self._fail(started, str(e))

        supported = [(cap, key) for cap, key in DETAIL_CAPABILITIES if vendor.supports(cap)]
        if not supported:
            return self._fail(
                started,
                f"El vendor '{vendor.vendor_name}' no soporta consultas de detalle de ONU"
            )

        data: Dict[str, Any] = {}
        for capability, key in supported:
            pair = vendor.capability(capability)
            try:
                raw = await self._run(pair.build(port, onu_id))
            except OltError as e:
                logger.warning(f"Falló {capability.value} de ONU {port}:{onu_id}: {e}")
                continue

            parsed = pair.parse(raw)
            if isinstance(parsed, list):
                data[key] = [entry.to_dict() for entry in parsed]
            else:
                data[key] = parsed.to_dict()

        return self._ok(started, data)

    # ================================================================
    # HELPERS
    # ================================================================

    async def _run(self, command: CommandText) -> str:
        """Ejecuta el comando y regresa solo la salida de las líneas de consulta."""
        outputs = await self.executor(list(command.lines))
        query_outputs = (outputs or [])[command.privilege_count:]
        return "\n".join(output or "" for output in query_outputs)

    def _ok(self, started: float, data: Any) -> OltQueryResponse:
        return OltQueryResponse(
            success=True,
            data=data,
            execution_time_ms=self._elapsed_ms(started),
            timestamp=datetime.now(timezone.utc).isoformat(),
        )

    def _fail(self, started: float, error: str) -> OltQueryResponse:
        return OltQueryResponse(
            success=False,
            error=error,
            execution_time_ms=self._elapsed_ms(started),
            timestamp=datetime.now(timezone.utc).isoformat(),
        )

    def _elapsed_ms(self, started: float) -> int:
        return int((time.monotonic() - started) * 1000)
