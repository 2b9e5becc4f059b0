"""
Scalar decoding for generic rows.

Drivers hand back whatever Python type their column converters produce. Every value that
leaves the client is normalized into one of the kinds in `ValueKind` so callers only ever
see `None`, `bool`, `int`, `float`, `str`, `datetime` or `bytes`; the Python type of a decoded
value is its tag, and `kind_of` reads it back.

Where the driver exposes PEP 249 type objects (`DATETIME`, `BINARY`, `STRING`), the column type
reported in `cursor.description` picks the kind and text values are converted to match it.
Drivers without type objects (sqlite3 reports no column types) fall back to the value itself.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from types import ModuleType
from typing import Any, Union
from uuid import UUID

Scalar = Union[None, bool, int, float, str, datetime, bytes]
Row = dict[str, Scalar]
ResultSet = list[Row]


class ValueKind(str, Enum):
    NULL = "null"
    INTEGER = "integer"
    FLOAT = "float"
    TEXT = "text"
    BOOLEAN = "boolean"
    TIMESTAMP = "timestamp"
    BINARY = "binary"


_TYPE_OBJECT_KINDS: tuple[tuple[str, ValueKind], ...] = (
    ("DATETIME", ValueKind.TIMESTAMP),
    ("BINARY", ValueKind.BINARY),
    ("STRING", ValueKind.TEXT),
)


def decode_value(raw: Any, kind: ValueKind | None = None) -> Scalar:
    """Normalize a driver value into a supported scalar, honoring the column kind when known."""

    if raw is None:
        return None
    if isinstance(raw, str):
        if kind is ValueKind.TIMESTAMP:
            try:
                return datetime.fromisoformat(raw)
            except ValueError:
                # Values such as MySQL zero dates have no datetime form.
                return raw
        if kind is ValueKind.BINARY:
            return raw.encode("utf-8")
    # bool is a subclass of int and must be checked first.
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, int):
        return raw
    if isinstance(raw, (float, Decimal)):
        return float(raw)
    if isinstance(raw, str):
        return raw
    if isinstance(raw, datetime):
        return raw
    if isinstance(raw, date):
        return datetime.combine(raw, time.min)
    if isinstance(raw, (bytes, bytearray, memoryview)):
        return bytes(raw)
    if isinstance(raw, time):
        return raw.isoformat()
    if isinstance(raw, UUID):
        return str(raw)
    if isinstance(raw, (list, tuple, dict)):
        return json.dumps(raw, default=str)
    return str(raw)


def kind_of(value: Scalar) -> ValueKind:
    """Return the tag of an already decoded scalar."""

    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, int):
        return ValueKind.INTEGER
    if isinstance(value, float):
        return ValueKind.FLOAT
    if isinstance(value, datetime):
        return ValueKind.TIMESTAMP
    if isinstance(value, bytes):
        return ValueKind.BINARY
    if isinstance(value, str):
        return ValueKind.TEXT
    raise TypeError(f"Unsupported scalar type: {type(value).__name__}")


def _kind_for(type_code: Any, type_objects: Sequence[tuple[Any, ValueKind]]) -> ValueKind | None:
    if type_code is None:
        return None
    for type_object, kind in type_objects:
        if type_object is not None and type_object == type_code:
            return kind
    return None


def column_kinds(type_codes: Sequence[Any], dbapi: ModuleType | None) -> list[ValueKind | None]:
    """Map `cursor.description` type codes to kinds using the driver's type objects."""

    type_objects = [(getattr(dbapi, name, None), kind) for name, kind in _TYPE_OBJECT_KINDS]
    return [_kind_for(type_code, type_objects) for type_code in type_codes]


def decode_rows(
    columns: Sequence[str],
    rows: Iterable[Sequence[Any]],
    kinds: Sequence[ValueKind | None] | None = None,
) -> ResultSet:
    """Build generic rows from column metadata read once and the raw row tuples that follow."""

    declared = list(kinds) if kinds else [None] * len(columns)
    return [
        {name: decode_value(raw, kind) for name, kind, raw in zip(columns, declared, raw_row)}
        for raw_row in rows
    ]
