"""
Sistema ISP - Schemas
"""
from olt_monitor.schemas.olt import OnuQueryRequest, OltQueryResponse

__all__ = ["OnuQueryRequest", "OltQueryResponse"]
