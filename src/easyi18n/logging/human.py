"""
Human Log — Formatter y helper para logs de trazabilidad del build.

Produce output legible con estructura clara. El usuario ve qué hace el
build paso a paso, sin ruido técnico.

Formato de ejemplo:
    ─── easyi18n · fr ──────────────────────────────

    Catalog locales/fr.po → 42 translations
      ✓ main.js (12 nuggets, 11 translated)
      ⚠ Missing translation in main.js: 'Page not found' (fr)

    ✓ Build complete (3 assets, 1 rewritten, 1 warning)
"""

import logging
import sys

from .levels import HUMAN

# Atributos estándar de LogRecord que no son parámetros del evento
_RECORD_ATTRS = frozenset({
    "msg", "args", "levelname", "levelno", "pathname",
    "filename", "module", "exc_info", "exc_text", "stack_info",
    "lineno", "funcName", "created", "msecs", "relativeCreated",
    "thread", "threadName", "processName", "process", "message",
    "taskName", "name", "event",
})


class HumanFormatter:
    """Formateador de eventos de trazabilidad del build.

    Convierte eventos estructurados a texto legible con formato consistente.
    Cada tipo de evento tiene su formato propio.
    """

    def format_event(self, event: str, **kw) -> str | None:
        """Formatea un evento a texto legible.

        Args:
            event: Nombre del evento (ej: "asset.rewritten")
            **kw: Parámetros del evento

        Returns:
            Texto formateado o None si el evento no tiene formato definido
        """
        match event:

            # ── CATALOG ──────────────────────────────────────────────────
            case "catalog.loaded":
                path = kw.get("path", "?")
                entries = kw.get("entries", 0)
                return f"Catalog {path} → {_count(entries, 'translation')}"

            case "catalog.default_pass":
                locale = kw.get("locale", "?")
                return f"No catalog for '{locale}': default locale pass"

            case "catalog.lookup_written":
                return f"  lookup → {kw.get('path', '?')}"

            # ── ASSETS ───────────────────────────────────────────────────
            case "asset.rewritten":
                asset = kw.get("asset", "?")
                nuggets = kw.get("nuggets", 0)
                translated = kw.get("translated", 0)
                return f"  ✓ {asset} ({_count(nuggets, 'nugget')}, {translated} translated)"

            case "translation.missing":
                asset = kw.get("asset", "?")
                key = _shorten(str(kw.get("key", "?")))
                locale = kw.get("locale", "?")
                return f"  ⚠ Missing translation in {asset}: '{key}' ({locale})"

            # ── BUILD ────────────────────────────────────────────────────
            case "build.complete":
                assets = kw.get("assets", 0)
                rewritten = kw.get("rewritten", 0)
                warnings = kw.get("warnings", 0)
                return (
                    f"\n✓ Build complete ({_count(assets, 'asset')}, {rewritten} rewritten, "
                    f"{_count(warnings, 'warning')})"
                )

            case _:
                return None


class HumanLogHandler(logging.Handler):
    """Handler de logging que filtra eventos HUMAN y los formatea.

    Solo procesa registros de nivel HUMAN (25). El resto los ignora.
    Escribe a stderr para no romper pipes stdout.
    """

    def __init__(self, stream=None) -> None:
        super().__init__(level=HUMAN)
        self.stream = stream or sys.stderr
        self.formatter_inst = HumanFormatter()

    def emit(self, record: logging.LogRecord) -> None:
        try:
            if record.levelno != HUMAN:
                return

            event, kw = _event_from_record(record)

            formatted = self.formatter_inst.format_event(event, **kw)
            if formatted is not None:
                self.stream.write(formatted + "\n")
                self.stream.flush()
        except Exception:
            self.handleError(record)


class HumanLog:
    """Helper tipado para emitir logs de nivel HUMAN desde el código.

    En lugar de llamar log.log(HUMAN, "event", ...) directamente,
    usa métodos con nombres semánticos claros.

    Uso:
        hlog = HumanLog(structlog.get_logger())
        hlog.asset_rewritten("main.js", nuggets=12, translated=11)
    """

    def __init__(self, logger) -> None:
        self._log = logger

    def _emit(self, event: str, **kw) -> None:
        self._log.log(HUMAN, event, **kw)

    def catalog_loaded(self, path: str, entries: int) -> None:
        self._emit("catalog.loaded", path=path, entries=entries)

    def default_pass(self, locale: str) -> None:
        self._emit("catalog.default_pass", locale=locale)

    def lookup_written(self, path: str) -> None:
        self._emit("catalog.lookup_written", path=path)

    def asset_rewritten(self, asset: str, nuggets: int, translated: int) -> None:
        self._emit("asset.rewritten", asset=asset, nuggets=nuggets, translated=translated)

    def missing_translation(self, asset: str, key: str, locale: str) -> None:
        self._emit("translation.missing", asset=asset, key=key, locale=locale)

    def build_complete(self, assets: int, rewritten: int, warnings: int) -> None:
        self._emit("build.complete", assets=assets, rewritten=rewritten, warnings=warnings)


def _shorten(text: str, limit: int = 60) -> str:
    """Acorta una clave para mostrarla en una sola línea."""
    single_line = text.replace("\n", "\\n")
    return single_line[:limit] + "..." if len(single_line) > limit else single_line


def _count(n, noun: str) -> str:
    """`1 warning`, `3 warnings`."""
    return f"{n} {noun}" if n == 1 else f"{n} {noun}s"


def _event_from_record(record: logging.LogRecord) -> tuple[str, dict]:
    """Extrae el nombre del evento y sus parámetros de un LogRecord.

    Con structlog (ProcessorFormatter.wrap_for_formatter) el event dict
    llega intacto en record.msg. Un registro stdlib normal lleva los
    parámetros como atributos del record (extra=...).
    """
    if isinstance(record.msg, dict):
        kw = dict(record.msg)
        return str(kw.pop("event", "")), kw

    event = getattr(record, "event", None) or record.getMessage()
    kw = {
        k: v for k, v in record.__dict__.items()
        if not k.startswith("_") and k not in _RECORD_ATTRS
    }
    return event, kw
