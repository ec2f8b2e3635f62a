# src/termtest/pricing.py

"""Token pricing lookup used to display run cost."""

from typing import Any

import structlog

log = structlog.get_logger("pricing")

# USD per million tokens.
MODEL_PRICING: dict[str, dict[str, float]] = {
    "claude-opus-4": {"input": 15.0, "output": 75.0},
    "claude-sonnet-4": {"input": 3.0, "output": 15.0},
    "claude-3-7-sonnet": {"input": 3.0, "output": 15.0},
    "claude-3-5-sonnet": {"input": 3.0, "output": 15.0},
    "claude-3-5-haiku": {"input": 0.8, "output": 4.0},
    "gpt-4.1": {"input": 2.0, "output": 8.0},
    "gpt-4.1-mini": {"input": 0.4, "output": 1.6},
    "gpt-4o": {"input": 2.5, "output": 10.0},
    "gemini-2.5-pro": {"input": 1.25, "output": 10.0},
    "gemini-2.5-flash": {"input": 0.3, "output": 2.5},
}


def _lookup(model: str, tables: dict[str, dict[str, Any]]) -> dict[str, Any] | None:
    key = model.lower().rsplit("/", 1)[-1]
    if key in tables:
        return tables[key]
    # Dated or suffixed releases ("claude-sonnet-4-20250514") fall back to the longest known prefix.
    prefixes = [name for name in tables if key.startswith(f"{name}-")]
    if not prefixes:
        return None
    return tables[max(prefixes, key=len)]


def calculate_cost(
    model: str | None,
    input_tokens: int,
    output_tokens: int,
    tables: dict[str, dict[str, Any]] | None = None,
) -> float | None:
    """Cost in USD for the given usage, or None when the model has no known price."""
    if not model:
        return None
    row = _lookup(model, tables if tables is not None else MODEL_PRICING)
    if row is None:
        log.debug("No pricing for model", model=model)
        return None
    try:
        input_rate = float(row["input"])
        output_rate = float(row["output"])
    except (KeyError, TypeError, ValueError):
        log.warning("Malformed pricing row", model=model, row=row)
        return None
    return (input_tokens * input_rate + output_tokens * output_rate) / 1_000_000
