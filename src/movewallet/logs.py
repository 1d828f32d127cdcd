"""
Structured logging setup.
"""

import logging
import sys
from typing import Optional

import structlog

from movewallet.config import WalletConfig


def setup_logging(config: Optional[WalletConfig] = None) -> None:
    """
    Configure structlog from the wallet configuration.

    Uses ``config.log_level`` for the stdlib threshold and renders JSON when
    ``config.log_json`` is set, console output otherwise.
    """
    config = config or WalletConfig()
    level = logging.getLevelName(config.log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {config.log_level}")

    renderer = (
        structlog.processors.JSONRenderer() if config.log_json
        else structlog.dev.ConsoleRenderer()
    )
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout)
    logging.getLogger("movewallet").setLevel(level)


def short(value: Optional[str], length: int = 16) -> Optional[str]:
    """Truncate an address or hash for log output."""
    if value is None or len(value) <= length:
        return value
    return value[:length] + "..."
