"""
Configuración del logging estructurado (structlog sobre stdlib logging).

Los módulos de la librería emiten eventos con ``structlog.get_logger()``;
aquí se decide a dónde van:

- archivo JSON (una línea por evento) si ``logging.file`` está configurado,
  siempre a nivel DEBUG;
- stderr en formato legible, al nivel de ``logging.level``, subido por
  ``-v`` (INFO) o ``-vv`` (DEBUG) y desactivado con ``--quiet``.
"""

import logging
import sys
from pathlib import Path

import structlog

from ..config.schema import LoggingConfig

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}

_PRE_CHAIN = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
    structlog.processors.StackInfoRenderer(),
]


def _handler(handler: logging.Handler, level: int, renderer) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=_PRE_CHAIN)
    )
    return handler


def configure_logging(config: LoggingConfig, quiet: bool = False) -> None:
    """(Re)configura logging y structlog.

    Se puede llamar varias veces: los handlers anteriores se descartan.

    Args:
        config: Sección logging del AppConfig
        quiet: Sin salida de log por stderr
    """
    root = logging.getLogger()
    for old in root.handlers:
        old.close()
    root.handlers.clear()
    structlog.reset_defaults()

    # Los handlers filtran; el root deja pasar todo
    root.setLevel(logging.DEBUG)

    if config.file:
        log_path = Path(config.file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        root.addHandler(_handler(
            logging.FileHandler(log_path, encoding="utf-8"),
            logging.DEBUG,
            structlog.processors.JSONRenderer(),
        ))

    if not quiet:
        root.addHandler(_handler(
            logging.StreamHandler(sys.stderr),
            console_level(config),
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ))

    structlog.configure(
        processors=[
            *_PRE_CHAIN,
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def console_level(config: LoggingConfig) -> int:
    """Nivel efectivo de stderr: -vv → DEBUG, -v → como mucho INFO, si no ``level``."""
    if config.verbose >= 2:
        return logging.DEBUG
    configured = _LEVELS[config.level]
    if config.verbose == 1:
        return min(logging.INFO, configured)
    return configured
