from __future__ import annotations

"""General-purpose helpers for the UI."""

from typing import Iterable

import pandas as pd

from src.visitor_model import EDITABLE_FIELDS, FIELD_LABELS, Visitor, format_timestamp


TABLE_COLUMNS = [FIELD_LABELS[name] for name in EDITABLE_FIELDS]
_TIMESTAMP_ATTRS = ("check_in_time", "check_out_time")


def visitors_to_dataframe(visitors: Iterable[Visitor], *, formatted: bool = True) -> pd.DataFrame:
    """Tabulate visitors with display labels as columns and ids as the index.

    With `formatted=True` timestamps are rendered via `format_timestamp`;
    otherwise the wire values are kept (empty cells for missing times).
    """
    rows = []
    ids = []
    for v in visitors:
        row = {}
        for wire, attr in EDITABLE_FIELDS.items():
            value = getattr(v, attr)
            if attr in _TIMESTAMP_ATTRS:
                value = format_timestamp(value) if formatted else (value or "")
            row[FIELD_LABELS[wire]] = value
        rows.append(row)
        ids.append(v.id)
    df = pd.DataFrame(rows, columns=TABLE_COLUMNS, index=pd.Index(ids, name="ID"))
    return df
