"""Shared serialization utilities for sinks."""

from dataclasses import fields, is_dataclass
from decimal import Decimal, localcontext
from enum import Enum
from typing import Any

from payments_engine.models.base import quantum


def to_dict(obj: Any, places: int | None = None) -> dict:
    """Convert a snapshot (or any flat dataclass) to a JSON-ready dict.

    Parameters
    ----------
    obj : Any
        A dataclass instance or a dict.
    places : int | None
        When set, Decimals are rendered with exactly this many decimals.

    Returns
    -------
    dict
        Serialized dictionary.
    """
    if is_dataclass(obj):
        return {f.name: serialize_value(getattr(obj, f.name), places) for f in fields(obj)}
    elif isinstance(obj, dict):
        return {k: serialize_value(v, places) for k, v in obj.items()}
    else:
        return {"value": str(obj)}


def serialize_value(value: Any, places: int | None = None) -> Any:
    """Serialize a value for JSON output."""
    if isinstance(value, Decimal):
        return format_amount(value, places) if places is not None else str(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, dict):
        return {k: serialize_value(v, places) for k, v in value.items()}
    elif isinstance(value, list):
        return [serialize_value(v, places) for v in value]
    return value


def format_amount(value: Decimal, places: int) -> str:
    """Render an amount with a fixed number of decimal places."""
    with localcontext() as context:
        context.prec = max(context.prec, value.adjusted() + places + 2)
        return f"{value.quantize(quantum(places)):f}"
