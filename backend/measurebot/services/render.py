"""Presentation of result sets: flat rows for HTTP, Block Kit for Slack."""
import logging
import math
import re
from collections.abc import Sequence
from datetime import date, datetime, time, timezone
from typing import Any, Mapping

from dateutil import parser as dtparser

from ..core.errors import RenderFailure
from ..schemas.rows import Cell, CellKind, tag_row

logger = logging.getLogger(__name__)

Block = dict[str, Any]

DATE_TOKEN = "<!date^{epoch}^{{date_short_pretty}} at {{time}}|{fallback}>"
NULL_TEXT = "-"
_SEPARATOR = re.compile(r"[_-]")
_WORD_START = re.compile(r"\b\w")
# two defaults that share no date component
_FILL_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))


class _NoData:
    def __repr__(self) -> str:
        return "NO_DATA"

    def __bool__(self) -> bool:
        return False


NO_DATA = _NoData()


def render_rows(rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
    return rows


def format_label(name: str) -> str:
    """public_patient_id -> Public Patient Id

    Every separator becomes its own space, so a__b -> A  B.
    """
    spaced = _SEPARATOR.sub(" ", name)
    return _WORD_START.sub(lambda m: m.group(0).upper(), spaced)


def _looks_temporal(name: str) -> bool:
    lowered = name.lower()
    return "date" in lowered or "time" in lowered


def _parse_timestamp(text: str) -> datetime:
    """Parse text that carries a full calendar date.

    dateutil fills missing fields from its default, so "10:30" or "12" would
    silently become today; parsing against two unrelated defaults exposes that.
    """
    first, second = (dtparser.parse(text, default=d) for d in _FILL_DEFAULTS)
    if first.date() != second.date():
        raise ValueError(f"{text!r} has no complete date")
    return first


def _to_epoch(value: Any) -> int:
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        moment = datetime.combine(value, time.min)
    else:
        moment = _parse_timestamp(value)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return math.floor(moment.timestamp())


def _fallback_text(value: Any) -> str:
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def format_value(name: str, cell: Cell) -> str:
    if cell.kind is CellKind.NULL:
        return NULL_TEXT
    # untagged text falls back to sniffing the field name
    sniffed = cell.kind is CellKind.TEXT and isinstance(cell.value, str) and _looks_temporal(name)
    if cell.kind is CellKind.TIMESTAMP or sniffed:
        try:
            epoch = _to_epoch(cell.value)
        except (ValueError, OverflowError) as exc:
            logger.debug("Field %s value %r is not a timestamp: %s", name, cell.value, exc)
            return _fallback_text(cell.value)
        return DATE_TOKEN.format(epoch=epoch, fallback=_fallback_text(cell.value))
    return str(cell.value)


def build_section(row: Mapping[str, Any]) -> Block:
    fields = []
    for name, cell in tag_row(row).items():
        fields.append({
            "type": "mrkdwn",
            "text": f"*{format_label(name)}:*\n{format_value(name, cell)}",
        })
    return {"type": "section", "fields": fields}


def build_blocks(rows: Any) -> list[Block]:
    """Turn a non-empty sequence of rows into sections separated by dividers.

    Each row is laid out with its own fields, so rows projecting different
    columns each get their own labels.
    """
    if isinstance(rows, (str, bytes, Mapping)) or not isinstance(rows, Sequence) or len(rows) == 0:
        raise RenderFailure("Rows should be a non-empty sequence.")

    blocks: list[Block] = []
    for index, row in enumerate(rows):
        if not isinstance(row, Mapping):
            raise RenderFailure(f"Row {index} is a {type(row).__name__}, expected a mapping.")
        if index > 0:
            blocks.append({"type": "divider"})
        blocks.append(build_section(row))
    return blocks


def to_slack_message(rows: Any):
    """Return Block Kit blocks for rows, or NO_DATA when the result set is empty."""
    if isinstance(rows, Sequence) and not isinstance(rows, (str, bytes)) and len(rows) == 0:
        return NO_DATA
    return build_blocks(rows)
