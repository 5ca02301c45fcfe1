# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Iterable, TypeVar

import pandas as pd
from sklearn.model_selection import train_test_split as _sklearn_split

from ..errors import DatasetError
from ..schemas import DatasetSchema

TRUE_TOKENS = {"1", "true", "yes", "y", "t"}
FALSE_TOKENS = {"0", "false", "no", "n", "f"}

RecordT = TypeVar("RecordT")


@dataclass(frozen=True)
class TrainTestData:
    train_set: pd.DataFrame
    test_set: pd.DataFrame


def _parse_bool(value: str, *, column: str, line: int) -> bool:
    lowered = value.strip().lower()
    if lowered in TRUE_TOKENS:
        return True
    if lowered in FALSE_TOKENS:
        return False
    raise DatasetError(f"Line {line}: column {column!r} expects a boolean, got {value!r}")


def _read_rows(source: Path, *, width: int, has_header: bool, separator: str) -> tuple[list[int], list[list[str]]]:
    try:
        text = source.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise DatasetError(f"{source} is not valid UTF-8: {exc}") from exc

    line_numbers: list[int] = []
    rows: list[list[str]] = []
    for number, line in enumerate(text.splitlines(), 1):
        if has_header and number == 1:
            continue
        if not line:
            continue
        values = line.split(separator)
        if len(values) != width:
            raise DatasetError(f"{source}: line {number} has {len(values)} columns, expected {width} columns")
        line_numbers.append(number)
        rows.append(values)
    return line_numbers, rows


def load_dataset(
    path: Path | str,
    schema: DatasetSchema,
    *,
    has_header: bool = False,
    separator: str = "\t",
) -> pd.DataFrame:
    """Read a delimited text file into a frame typed by ``schema``.

    Fields are read verbatim (no quoting). A row whose column count differs
    from the schema, or whose boolean label cannot be parsed, raises
    ``DatasetError``; nothing is skipped but blank lines.
    """
    source = Path(path)
    if not source.is_file():
        raise DatasetError(f"Dataset file not found: {source}")

    names = schema.names
    line_numbers, rows = _read_rows(source, width=len(names), has_header=has_header, separator=separator)
    if not rows:
        raise DatasetError(f"Dataset file has no rows: {source}")
    frame = pd.DataFrame(rows, columns=names, dtype=str)

    for column in schema.columns:
        if column.dtype == "bool":
            frame[column.name] = pd.Series(
                [_parse_bool(value, column=column.name, line=line) for value, line in zip(frame[column.name], line_numbers)],
                dtype=bool,
            )
    return frame


def train_test_split(frame: pd.DataFrame, *, test_fraction: float = 0.2, seed: int = 0) -> TrainTestData:
    """Split rows into disjoint train/test partitions with a seeded shuffle."""
    if not 0.0 < test_fraction < 1.0:
        raise ValueError(f"test_fraction must be in (0, 1), got {test_fraction}")
    if len(frame) < 2:
        raise DatasetError(f"Cannot split a dataset of {len(frame)} row(s) into train and test partitions")
    train, test = _sklearn_split(frame, test_size=test_fraction, random_state=seed, shuffle=True)
    return TrainTestData(train_set=train.reset_index(drop=True), test_set=test.reset_index(drop=True))


def to_frame(records: Iterable[Any]) -> pd.DataFrame:
    rows = [asdict(record) for record in records]
    return pd.DataFrame(rows)


def from_frame(frame: pd.DataFrame, record_type: type[RecordT]) -> list[RecordT]:
    names = [item.name for item in fields(record_type)]  # type: ignore[arg-type]
    return [record_type(**{name: row[name] for name in names}) for row in frame.to_dict(orient="records")]
