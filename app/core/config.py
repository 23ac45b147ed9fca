"""
Configuración centralizada de la aplicación.

Este módulo maneja todas las variables de entorno y configuraciones
del servicio de órdenes multi-vendedor usando Pydantic Settings
para validación automática.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Configuración de la aplicación usando Pydantic Settings.

    Todas las configuraciones se cargan desde variables de entorno
    con valores por defecto apropiados para desarrollo.
    """

    # === CONFIGURACIÓN BÁSICA DE LA APP ===
    APP_NAME: str = "Marketplace Orders"
    APP_VERSION: str = "0.1.0"
    ENVIRONMENT: str = Field(default="development")
    DEBUG: bool = Field(default=True)

    # === CONFIGURACIÓN DEL SERVIDOR ===
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8080)
    WORKERS: int = Field(default=1)
    LOG_LEVEL: str = Field(default="INFO")
    ALLOWED_HOSTS: Optional[List[str]] = Field(default=None)

    # === CONFIGURACIÓN DE BASE DE DATOS ===
    DATABASE_URL: str = Field(default="sqlite+aiosqlite:///./marketplace.db")
    DB_POOL_SIZE: int = Field(default=10)
    DB_MAX_OVERFLOW: int = Field(default=20)
    DB_POOL_RECYCLE: int = Field(default=3600)
    DB_ECHO: bool = Field(default=False)
    # Crear tablas al arrancar (solo desarrollo / pruebas)
    DB_CREATE_TABLES: bool = Field(default=True)

    # === CONFIGURACIÓN DE ÓRDENES ===
    DEFAULT_CURRENCY: str = Field(default="USD")
    PARENT_ORDER_PREFIX: str = Field(default="ORD")
    DEFAULT_PAGE_SIZE: int = Field(default=50)
    MAX_PAGE_SIZE: int = Field(default=200)

    # === CONFIGURACIÓN DE LOGGING ===
    LOG_FILE_PATH: Optional[str] = Field(default="logs/app.log")
    LOG_MAX_SIZE_MB: int = Field(default=10)
    LOG_BACKUP_COUNT: int = Field(default=5)
    LOG_FORMAT: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    # === CONFIGURACIÓN DE DOCUMENTACIÓN ===
    ENABLE_DOCS: bool = Field(default=True)
    SLOW_REQUEST_THRESHOLD: float = Field(default=2.0)

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
        "extra": "allow",
    }

    @field_validator("ALLOWED_HOSTS", mode="before")
    @classmethod
    def parse_allowed_hosts(cls, v):
        """Parsea ALLOWED_HOSTS como lista separada por comas."""
        if isinstance(v, str):
            return [host.strip() for host in v.split(",") if host.strip()]
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Valida que el nivel de log sea válido."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL debe ser uno de: {valid_levels}")
        return v.upper()

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v):
        """Valida que el entorno sea válido."""
        valid_envs = ["development", "staging", "production", "testing"]
        if v.lower() not in valid_envs:
            raise ValueError(f"ENVIRONMENT debe ser uno de: {valid_envs}")
        return v.lower()

    @field_validator("DEFAULT_CURRENCY")
    @classmethod
    def validate_currency(cls, v):
        """Valida que la moneda sea un código ISO de tres letras."""
        if not v or len(v) != 3 or not v.isalpha():
            raise ValueError("DEFAULT_CURRENCY debe ser un código ISO 4217 de tres letras")
        return v.upper()

    @field_validator("DEFAULT_PAGE_SIZE", "MAX_PAGE_SIZE")
    @classmethod
    def validate_page_size(cls, v):
        """Valida que el tamaño de página sea positivo."""
        if v < 1:
            raise ValueError("El tamaño de página debe ser mayor a 0")
        return v

    @field_validator("PORT")
    @classmethod
    def validate_port(cls, v):
        """Valida que el puerto esté en rango válido."""
        if not 1 <= v <= 65535:
            raise ValueError("PORT debe estar entre 1 y 65535")
        return v

    @property
    def is_production(self) -> bool:
        """Verifica si está en entorno de producción."""
        return self.ENVIRONMENT == "production"


@lru_cache()
def get_settings() -> Settings:
    """
    Obtiene instancia singleton de configuración.

    Usa LRU cache para evitar recrear la configuración
    múltiples veces durante la ejecución.

    Returns:
        Settings: Instancia de configuración
    """
    return Settings()


# Instancia global para uso directo
settings = get_settings()
