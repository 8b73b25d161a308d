"""
Errores del flujo de visura.

Cada paso antepone su nombre al mensaje, de modo que un fallo se lee como
una cadena causal: "get_real_estate_data: select_province: ...".
"""

import functools
from typing import List


class CatastoError(Exception):
    """Error base del cliente SISTER."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message
        self.steps: List[str] = []

    def add_step(self, step: str) -> None:
        self.steps.insert(0, step)
        self.message = f"{step}: {self.message}"
        self.args = (self.message,)

    def __str__(self) -> str:
        return self.message


class NavigationError(CatastoError):
    """Un elemento o navegación no respondió tras agotar los reintentos."""


class StructuralError(CatastoError):
    """Falta un elemento que la página siempre debería tener."""


class JurisdictionNotFoundError(StructuralError):
    """Ninguna opción del selector de provincia coincide con el código pedido."""


class AuthenticationError(CatastoError):
    """El login nunca completó la navegación."""


class CleanupError(CatastoError):
    """Falló el logout; solo se registra."""


def prefix_error(step: str, error: BaseException) -> CatastoError:
    """
    Devuelve el error con el nombre del paso antepuesto.

    Los errores tipados conservan su identidad; cualquier otro se envuelve en
    CatastoError con el original como causa.
    """
    if isinstance(error, CatastoError):
        error.add_step(step)
        return error

    message = str(error) or error.__class__.__name__
    wrapped = CatastoError(message)
    wrapped.add_step(step)
    wrapped.__cause__ = error
    return wrapped


def wrap_step(step: str):
    """Decorador para corutinas: re-lanza cualquier error con el prefijo del paso."""

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                error = prefix_error(step, e)
                if error is e:
                    raise
                raise error from e
        return wrapper

    return decorator
