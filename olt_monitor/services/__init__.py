"""
Sistema ISP - Services
Servicios de integración con equipos de red.
"""
