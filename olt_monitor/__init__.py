"""
Sistema ISP - OLT Monitor
Abstracción multi-marca de OLTs y parseo de la salida del CLI.
"""

__version__ = "1.0.0"
