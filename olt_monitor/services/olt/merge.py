"""
Sistema ISP - Fusión de estado + detalle de ONU
El detalle (active-onu / inactive-onu) solo agrega información al
estado principal; nunca lo contradice con valores vacíos o N/A.
"""
from dataclasses import fields, replace
from typing import Optional

from olt_monitor.services.olt.olt_base import OnuStatusRecord, OnuDetailRecord
from olt_monitor.services.olt.normalizers import is_na


def merge_onu_details(
    primary: OnuStatusRecord,
    detail: Optional[OnuDetailRecord]
) -> OnuStatusRecord:
    """
    Regresa un nuevo registro con los campos definidos del detalle.
    Un valor None o "N/A" del detalle nunca sobreescribe al principal.
    """
    if detail is None:
        return primary

    updates = {}
    for f in fields(detail):
        if f.name == "raw_data":
            continue
        value = getattr(detail, f.name)
        if is_na(value):
            continue
        updates[f.name] = value

    raw_data = dict(primary.raw_data)
    if detail.raw_data:
        raw_data["detail"] = dict(detail.raw_data)

    return replace(primary, raw_data=raw_data, **updates)
