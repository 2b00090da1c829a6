from __future__ import annotations

import logging
from typing import Any, Dict, Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_handler: Optional[logging.Handler] = None


def configure_logging(config: Dict[str, Any]) -> int:
    global _handler
    name = str(config.get("log_level", "INFO")).upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        level = logging.INFO
    root = logging.getLogger()
    root.setLevel(level)
    if _handler is None:
        _handler = logging.StreamHandler()
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    if _handler not in root.handlers:
        root.addHandler(_handler)
    return level
