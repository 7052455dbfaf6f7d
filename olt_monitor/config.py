"""
Sistema ISP - Configuración central con Pydantic Settings
Parámetros del motor de comandos OLT (vendor por defecto, tamaño de snippets).
"""
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # App
    APP_NAME: str = "OLT Monitor"
    APP_VERSION: str = "1.0.0"

    # OLT
    OLT_DEFAULT_VENDOR: str = "bdcom"    # a dónde resuelve "auto"
    OLT_RAW_SNIPPET_LIMIT: int = 500     # máx. caracteres de salida cruda guardados en raw_data
    OLT_FETCH_DETAILS: bool = True       # consultar active-onu / inactive-onu tras el estado

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }


@lru_cache()
def get_settings() -> Settings:
    return Settings()
