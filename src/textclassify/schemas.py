# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

COLUMN_DTYPES = ("str", "bool")


@dataclass(frozen=True, slots=True)
class ColumnSpec:
    index: int
    name: str
    dtype: str = "str"

    def __post_init__(self) -> None:
        if self.dtype not in COLUMN_DTYPES:
            raise ValueError(f"Unsupported column dtype for {self.name!r}: {self.dtype!r}")
        if self.index < 0:
            raise ValueError(f"Column index must be >= 0, got {self.index} for {self.name!r}")


@dataclass(frozen=True, slots=True)
class DatasetSchema:
    """Positional column mapping of a delimited dataset file.

    ``label`` and ``text_columns`` bind the schema fields to the roles they play
    in a pipeline, so later stages never guess at column names.
    """

    columns: tuple[ColumnSpec, ...]
    label: str
    text_columns: tuple[str, ...]
    id_column: str | None = None

    def __post_init__(self) -> None:
        indices = sorted(column.index for column in self.columns)
        if indices != list(range(len(self.columns))):
            raise ValueError(f"Column indices must be unique and contiguous from 0, got {indices}")
        names = [column.name for column in self.columns]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate column names in schema: {names}")
        for name in (self.label, *self.text_columns):
            if name not in names:
                raise ValueError(f"Column {name!r} is not declared in the schema")
        if not self.text_columns:
            raise ValueError("A schema needs at least one text column")
        if self.id_column is not None and self.id_column not in names:
            raise ValueError(f"Column {self.id_column!r} is not declared in the schema")
        for name in self.text_columns:
            if self.column(name).dtype != "str":
                raise ValueError(f"Text column {name!r} must be typed 'str'")

    @property
    def names(self) -> list[str]:
        return [column.name for column in sorted(self.columns, key=lambda item: item.index)]

    @property
    def label_dtype(self) -> str:
        return self.column(self.label).dtype

    def column(self, name: str) -> ColumnSpec:
        for column in self.columns:
            if column.name == name:
                return column
        raise KeyError(name)


@dataclass(frozen=True, slots=True)
class GitHubIssue:
    id: str
    area: str
    title: str
    description: str

    SCHEMA: ClassVar[DatasetSchema] = DatasetSchema(
        columns=(
            ColumnSpec(0, "id"),
            ColumnSpec(1, "area"),
            ColumnSpec(2, "title"),
            ColumnSpec(3, "description"),
        ),
        label="area",
        text_columns=("title", "description"),
        id_column="id",
    )


@dataclass(frozen=True, slots=True)
class PageData:
    page_text: str
    diagnosis_exists: bool

    SCHEMA: ClassVar[DatasetSchema] = DatasetSchema(
        columns=(ColumnSpec(0, "page_text"), ColumnSpec(1, "diagnosis_exists", "bool")),
        label="diagnosis_exists",
        text_columns=("page_text",),
    )


@dataclass(frozen=True, slots=True)
class SentimentData:
    sentiment_text: str
    sentiment: bool

    SCHEMA: ClassVar[DatasetSchema] = DatasetSchema(
        columns=(ColumnSpec(0, "sentiment_text"), ColumnSpec(1, "sentiment", "bool")),
        label="sentiment",
        text_columns=("sentiment_text",),
    )


@dataclass(frozen=True, slots=True)
class PredictionResult:
    text: dict[str, str]
    predicted_label: str | bool
    probability: float
    score: float
    label_text: str = ""

    @property
    def summary(self) -> str:
        return " | ".join(value for value in self.text.values() if value)
