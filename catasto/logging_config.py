"""Configuración de logging del paquete."""

import logging
import sys
from typing import Optional

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s - %(message)s"

_HANDLER_NAME = "catasto-console"


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Instala un handler de consola en el logger "catasto".

    Idempotente: llamadas repetidas solo ajustan el nivel.
    """
    if level is None:
        from catasto.config import settings
        level = settings.log_level

    logger = logging.getLogger("catasto")
    logger.setLevel(level.upper())

    if not any(h.get_name() == _HANDLER_NAME for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger
