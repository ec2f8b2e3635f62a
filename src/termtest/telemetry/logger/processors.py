# src/termtest/telemetry/logger/processors.py

"""
Custom structlog processors used by the termtest logging pipeline.
"""

import logging

from structlog.typing import EventDict, WrappedLogger

LOG_EMOJIS: dict[int | str, str] = {
    logging.DEBUG: "🐛",
    logging.INFO: "ℹ️",
    logging.WARNING: "⚠️",
    logging.ERROR: "❌",
    logging.CRITICAL: "💥",
    "load": "📄",
    "declare": "🧩",
    "render": "🖼️",
    "fail": "🚫",
    "time": "⏱️",
    "success": "🎉",
    "general": "➡️",
}

# Helper keys consumed by the processors below; never rendered.
_HELPER_KEYS = ("emoji_key",)


def add_emoji_processor(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Prefixes the event with an emoji chosen from `emoji_key` or the log level."""
    emoji_key = event_dict.get("emoji_key")
    emoji = LOG_EMOJIS.get(emoji_key) if emoji_key else None
    if emoji is None:
        level_name = str(event_dict.get("level", method_name)).upper()
        emoji = LOG_EMOJIS.get(logging.getLevelName(level_name), LOG_EMOJIS["general"])

    event = event_dict.get("event")
    if isinstance(event, str) and not event.startswith(emoji):
        event_dict["event"] = f"{emoji} {event}"
    return event_dict


def remove_extra_keys_processor(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    """Drops helper keys consumed by earlier processors."""
    for key in _HELPER_KEYS:
        event_dict.pop(key, None)
    return event_dict
