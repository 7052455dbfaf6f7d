"""
Sistema ISP - Schemas: Consultas a OLT
Request/response de las consultas orquestadas sobre una ONU.
"""
from pydantic import BaseModel, Field
from typing import Optional, Any


class OnuQueryRequest(BaseModel):
    """Consulta sobre una ONU de una OLT."""
    interface: str = Field(..., min_length=1)   # "epon0/8:15" o "0/8:15"
    vendor_type: str = "auto"                    # "bdcom", "zte", "auto"


class OltQueryResponse(BaseModel):
    """Resultado de una consulta: datos parseados o error."""
    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None
    execution_time_ms: int = 0
    timestamp: str
