"""
# Logging Manager

Central logger factory for the Freet Social service. Every module asks for a
logger through `get_logger()` and, optionally, a bracketed prefix that tags
its lines (e.g. `[DATABASE]`, `[Followers Routes]`).

```python
from freet_social.managers.logging_manager import get_logger

logger = get_logger(prefix="[FollowersService]")
logger.info("Added follower %s to %s", follower, followed)
```

Handlers are attached once to the named root logger; the level comes from
`settings.DEFAULT_LOG_LEVEL`.
"""

import logging
import sys
from typing import Any, MutableMapping, Tuple

from freet_social.config import settings

DEFAULT_LOGGER_NAME = "FreetSocial"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

_configured_loggers: set = set()


class PrefixedLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that prepends a fixed prefix to every message."""

    def __init__(self, logger: logging.Logger, prefix: str = ""):
        super().__init__(logger, {"prefix": prefix})
        self.prefix = prefix

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> Tuple[Any, MutableMapping[str, Any]]:
        if self.prefix:
            return f"{self.prefix} {msg}", kwargs
        return msg, kwargs


def _configure(logger: logging.Logger) -> None:
    if logger.name in _configured_loggers:
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    level = getattr(logging, settings.DEFAULT_LOG_LEVEL.upper(), logging.INFO)
    logger.setLevel(level)
    logger.propagate = True
    _configured_loggers.add(logger.name)


def get_logger(name: str = DEFAULT_LOGGER_NAME, prefix: str = "") -> PrefixedLoggerAdapter:
    """
    Return a configured logger, optionally tagging every line with `prefix`.

    Args:
        name: Logger name; defaults to the application logger.
        prefix: Text prepended to each message, conventionally `[Component]`.

    Returns:
        PrefixedLoggerAdapter: Adapter exposing the standard logging methods.
    """
    logger = logging.getLogger(name)
    _configure(logger)
    return PrefixedLoggerAdapter(logger, prefix)
