from __future__ import annotations

from typing import Dict, Optional

from engine.enums import LogLevel

LEVEL_ALIASES: Dict[str, LogLevel] = {
    "ERROR": LogLevel.error,
    "ERR": LogLevel.error,
    "FATAL": LogLevel.error,
    "CRITICAL": LogLevel.error,
    "WARN": LogLevel.warn,
    "WARNING": LogLevel.warn,
    "INFO": LogLevel.info,
    "DEBUG": LogLevel.debug,
    "TRACE": LogLevel.debug,
}


def classify(token: Optional[str]) -> LogLevel:
    """Map a raw level token to its canonical level; anything unrecognised is UNKNOWN."""
    if not token:
        return LogLevel.unknown
    return LEVEL_ALIASES.get(token.strip().upper(), LogLevel.unknown)


def is_level_token(token: Optional[str]) -> bool:
    return classify(token) is not LogLevel.unknown
