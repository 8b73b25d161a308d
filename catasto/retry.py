"""Reintento acotado con espera fija para acciones de la UI."""

import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def retry_async(
    factory: Callable[[], Awaitable[T]],
    attempts: int = 3,
    delay_seconds: float = 0.5,
    label: str = "action",
) -> T:
    """
    Ejecuta `factory()` hasta `attempts` veces.

    Args:
        factory: Función que crea una nueva corutina en cada intento
        attempts: Número total de intentos (mínimo 1)
        delay_seconds: Espera fija entre intentos (sin backoff exponencial)
        label: Nombre de la acción para los logs

    Returns:
        El resultado del primer intento exitoso

    Raises:
        El error del último intento si todos fallan
    """
    attempts = max(1, attempts)
    last_error = None

    for attempt in range(1, attempts + 1):
        try:
            return await factory()
        except Exception as e:
            last_error = e
            if attempt == attempts:
                break
            logger.warning(f"🔁 {label}: intento {attempt}/{attempts} falló ({e}), reintentando en {delay_seconds}s")
            await asyncio.sleep(delay_seconds)

    logger.error(f"❌ {label}: {attempts} intentos agotados")
    raise last_error
