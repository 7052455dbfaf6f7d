"""
Sistema ISP - OLT Vendors
Un módulo por marca de OLT.
"""
from olt_monitor.services.olt.drivers.bdcom_driver import BdcomVendor
from olt_monitor.services.olt.drivers.zte_driver import ZteVendor

__all__ = ["BdcomVendor", "ZteVendor"]
