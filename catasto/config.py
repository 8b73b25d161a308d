"""
Configuración del cliente SISTER usando Pydantic Settings.
Lee variables de entorno (prefijo CATASTO_) o .env file.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional

from config.sister_selectors import LOGIN_URL, PROVINCE_SELECTION_URL


class Settings(BaseSettings):
    """Settings del flujo de visura catastal."""

    # Portal
    login_url: str = LOGIN_URL
    province_selection_url: str = PROVINCE_SELECTION_URL

    # Browser
    headless: bool = True
    browser_locale: str = "it-IT"
    accept_language: str = "it-IT,it;q=0.9"
    navigation_timeout_ms: int = 30000

    # Reintentos (intentos totales por paso, espera fija entre intentos)
    retry_delay_seconds: float = 0.5
    login_attempts: int = 5
    confirm_attempts: int = 3
    province_attempts: int = 5
    search_attempts: int = 5
    logout_attempts: int = 3

    # Pausa tras el login para que el portal asiente la sesión
    post_login_pause_seconds: float = 5.0

    # Logging
    log_level: str = "INFO"

    # Credenciales para el test de integración contra el portal real
    test_username: Optional[str] = None
    test_password: Optional[str] = None
    test_fiscal_code_individual: Optional[str] = None
    test_province_individual: Optional[str] = None
    test_fiscal_code_company: Optional[str] = None
    test_province_company: Optional[str] = None
    test_fiscal_code_without_results: Optional[str] = None

    model_config = SettingsConfigDict(
        env_prefix="CATASTO_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Singleton
settings = Settings()
