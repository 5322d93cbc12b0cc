"""Tagged view of result rows used by the chat renderer."""
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping


class CellKind(str, Enum):
    TEXT = "text"
    NUMBER = "number"
    TIMESTAMP = "timestamp"
    NULL = "null"


@dataclass(frozen=True)
class Cell:
    kind: CellKind
    value: Any


def tag_value(value: Any) -> Cell:
    if value is None:
        return Cell(CellKind.NULL, None)
    # datetime is a subclass of date
    if isinstance(value, date):
        return Cell(CellKind.TIMESTAMP, value)
    if isinstance(value, bool):
        return Cell(CellKind.TEXT, value)
    if isinstance(value, (int, float, Decimal)):
        return Cell(CellKind.NUMBER, value)
    return Cell(CellKind.TEXT, value)


def tag_row(row: Mapping[str, Any]) -> dict[str, Cell]:
    return {name: tag_value(value) for name, value in row.items()}
