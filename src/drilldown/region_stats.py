"""
Region offense statistics – parse a two-column offense table into totals.

Tables are assumed to look like:

    Offense, Value
    "Homicide", 123
    "Robbery",  "1,456"

Rows keep their input order; nothing here ranks or sorts them.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple

import pandas as pd

from drilldown.utils.logger_config import setup_logger

logger = setup_logger(__name__)

# leading number only; trailing text such as "(est.)" or "%" is ignored
LEADING_NUMBER = re.compile(r"\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")


@dataclass(frozen=True)
class OffenseRow:
    name: str
    value: float


@dataclass(frozen=True)
class RegionStats:
    label: str
    rows: Tuple[OffenseRow, ...]
    total: float

    def head(self, n: int) -> Tuple[OffenseRow, ...]:
        """First *n* rows in source order."""
        return self.rows[:n]

    @property
    def max_value(self) -> float:
        """Largest row value, floored at 1 so bar scaling never divides by zero."""
        return max([1.0, *(row.value for row in self.rows)])


def _cell(row: Sequence, idx: int) -> str:
    try:
        val = row[idx]
    except (IndexError, KeyError, TypeError):
        return ''
    if val is None:
        return ''
    if isinstance(val, float) and math.isnan(val):
        return ''
    return str(val)


def parse_value(raw: Optional[str]) -> float:
    """Parse a count cell; separators are stripped and anything unusable becomes 0."""
    text = (raw or '').replace(',', '')
    match = LEADING_NUMBER.match(text)
    if match is None:
        return 0.0
    value = float(match.group(0))
    if not math.isfinite(value) or value < 0:
        return 0.0
    return value


def parse_stats(table: Iterable[Sequence], label: str) -> RegionStats:
    """
    Build a RegionStats from rows of (offense name, raw value).

    Rows with a blank name are dropped entirely. Malformed values are kept as
    zero so one bad cell never fails the whole table.
    """
    rows = []
    total = 0.0
    skipped = 0
    for row in table:
        name = _cell(row, 0).strip()
        if not name:
            skipped += 1
            continue
        value = parse_value(_cell(row, 1))
        rows.append(OffenseRow(name=name, value=value))
        total += value

    logger.debug(f'{label}: parsed {len(rows)} rows, skipped {skipped} blank, total {total:,.0f}')
    return RegionStats(label=label, rows=tuple(rows), total=total)


def parse_frame(df: pd.DataFrame, label: str) -> RegionStats:
    """Parse the first two columns of a loaded offense table."""
    if df.shape[1] == 0:
        return RegionStats(label=label, rows=(), total=0.0)
    return parse_stats(df.iloc[:, :2].itertuples(index=False, name=None), label)
