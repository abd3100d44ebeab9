"""
HUMAN logging level -- Readable build traceability.

Custom level between INFO (20) and WARNING (30).
Does not indicate severity -- indicates high-level traceability so the user
can follow what the build does (catalog loaded, asset rewritten, missing
translation) without technical noise.

Hierarchy:
    debug  (10) -> Per-nugget resolution, skipped assets
    info   (20) -> System operations (config loaded, catalog parsed)
    human  (25) -> * What the build does
    warn   (30) -> Non-fatal problems
    error  (40) -> Errors
"""

import logging

import structlog

# Custom level: between INFO (20) and WARNING (30)
HUMAN = 25
logging.addLevelName(HUMAN, "HUMAN")


# structlog.stdlib.BoundLogger.log(HUMAN, ...) proxies to Logger.human()
def _human_method(self, message, *args, **kwargs):
    if self.isEnabledFor(HUMAN):
        self._log(HUMAN, message, args, **kwargs)


logging.Logger.human = _human_method

# Register the level in structlog to avoid KeyError: 25
if hasattr(structlog, "stdlib"):
    try:
        structlog.stdlib.LEVEL_TO_NAME[HUMAN] = "human"
    except (AttributeError, KeyError):
        pass
