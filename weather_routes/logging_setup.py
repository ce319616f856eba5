"""Root logging configuration for the command-line driver."""

from __future__ import annotations

import logging
from typing import Optional

from .config import ObservabilityConfig, get_config

# Attributes present on every LogRecord; anything else came from `extra=`.
_RESERVED = set(vars(logging.LogRecord("", 0, "", 0, "", None, None))) | {
    "message",
    "asctime",
}


class ExtraFieldsFormatter(logging.Formatter):
    """Formatter that appends `extra={...}` context as key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        extras = {
            key: value
            for key, value in vars(record).items()
            if key not in _RESERVED and not key.startswith("_")
        }
        if not extras:
            return base
        context = " ".join(f"{key}={value}" for key, value in sorted(extras.items()))
        return f"{base} [{context}]"


def configure_logging(config: Optional[ObservabilityConfig] = None) -> None:
    """Configure root logging from the WR_LOG_ settings."""
    config = config or get_config().observability

    handler = logging.StreamHandler()
    if config.show_extra:
        handler.setFormatter(ExtraFieldsFormatter(config.format))
    else:
        handler.setFormatter(logging.Formatter(config.format))

    logging.basicConfig(
        level=config.level.upper(),
        handlers=[handler],
        force=True,
    )
