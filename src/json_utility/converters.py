"""Custom field types for typed values."""

import re
from datetime import date, datetime
from typing import Annotated, Any
from pydantic import BeforeValidator, PlainSerializer

_ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def encode_date(value: date) -> str:
    """Encode a calendar date as ``YYYY-MM-DD``."""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"


def decode_date(text: Any) -> date:
    """
    Decode a ``YYYY-MM-DD`` string into a date.

    Only the ISO 8601 extended date form with ASCII digits is accepted;
    basic (``20240229``), unpadded (``2024-2-29``) and date-time forms
    are rejected.
    """
    if not isinstance(text, str) or not _ISO_DATE.fullmatch(text):
        raise ValueError(f"Expected date in YYYY-MM-DD format, got {text!r}")
    year, month, day = (int(part) for part in text.split("-"))
    return date(year, month, day)


def _validate_iso_date(value: Any) -> date:
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    return decode_date(value)


# Plain ``date`` fields use pydantic's date handling, which also accepts
# Unix timestamps and date-times with a zero time part.
ISODate = Annotated[
    date,
    BeforeValidator(_validate_iso_date),
    PlainSerializer(encode_date, return_type=str),
]
