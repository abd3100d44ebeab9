"""
Configuración del logging de un build.

Cada pipeline se construye por separado y cuelga del root logger:

- archivo  → JSON, todo desde DEBUG (solo con logging.file)
- human    → stderr, solo eventos HUMAN (lo que hace el build)
- console  → stderr, eventos técnicos según -v / logging.level

`--quiet` deja solo el archivo. `bind_run_context` añade locale y catálogo a
todos los eventos estructurados del build en curso.
"""

import logging
import sys
from pathlib import Path

import structlog

from ..config.schema import LoggingConfig
from .human import HumanLogHandler
from .levels import HUMAN

# Niveles de config con los que el human handler sigue activo
_HUMAN_VISIBLE_LEVELS = frozenset({"debug", "info", "human"})

_VERBOSITY = {
    0: logging.WARNING,
    1: logging.INFO,
    2: logging.DEBUG,
}

_SHARED_PROCESSORS = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
    structlog.processors.StackInfoRenderer(),
]


def configure_logging(config: LoggingConfig, quiet: bool = False) -> None:
    """Instala los pipelines de logging para un build.

    Args:
        config: Configuración de logging (level, file, verbose)
        quiet: Si True, solo queda el pipeline de archivo
    """
    logging.root.handlers.clear()
    logging.root.setLevel(logging.DEBUG)
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()

    file_handler = _file_handler(Path(config.file)) if config.file else None
    if file_handler:
        logging.root.addHandler(file_handler)

    if not quiet:
        if config.level in _HUMAN_VISIBLE_LEVELS:
            logging.root.addHandler(_human_handler())
        logging.root.addHandler(_console_handler(config))

    # El event dict llega intacto a cada handler; cada uno lo renderiza
    # (JSON, human o consola)
    structlog.configure(
        processors=_SHARED_PROCESSORS + [
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def bind_run_context(locale: str, catalog: str | None) -> None:
    """Asocia locale y catálogo a los eventos estructurados del build."""
    structlog.contextvars.bind_contextvars(
        run_locale=locale,
        run_catalog=catalog or "(default)",
    )


def _file_handler(path: Path) -> logging.Handler:
    """Pipeline JSON a archivo: captura todo desde DEBUG."""
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(str(path), encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(
        processor=structlog.processors.JSONRenderer(),
        foreign_pre_chain=_SHARED_PROCESSORS,
    ))
    return handler


def _human_handler() -> logging.Handler:
    """Pipeline human: solo el nivel HUMAN exacto (25)."""
    handler = HumanLogHandler(stream=sys.stderr)
    handler.setLevel(HUMAN)
    handler.addFilter(lambda record: record.levelno == HUMAN)
    return handler


def _console_handler(config: LoggingConfig) -> logging.Handler:
    """Pipeline técnico a stderr. Nunca repite los eventos HUMAN."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(_console_level(config))
    handler.addFilter(lambda record: record.levelno != HUMAN)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(
        processor=structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        foreign_pre_chain=_SHARED_PROCESSORS,
    ))
    return handler


def _console_level(config: LoggingConfig) -> int:
    """Nivel del console handler a partir de -v y de config.level.

    Sin -v → WARNING, -v → INFO, -vv o más → DEBUG. Un config.level
    "debug"/"info" equivale a -vv/-v; "error" sube el umbral a ERROR.
    """
    if config.level == "error":
        return logging.ERROR

    verbose = config.verbose
    if config.level == "debug":
        verbose = max(verbose, 2)
    elif config.level == "info":
        verbose = max(verbose, 1)
    return _VERBOSITY.get(verbose, logging.DEBUG)
