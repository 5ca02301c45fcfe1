# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
"""Declarative pipeline specs.

A :class:`PipelineSpec` is a plain value: which columns feed the model, how
text is featurized and which trainer sits at the end. Nothing is fitted here;
:func:`build_estimator` turns a spec into an unfit scikit-learn pipeline and
``training.trainer.train_model`` is the only place data meets it.
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from sklearn.linear_model import LogisticRegression
from sklearn.pipeline import Pipeline

from .features import FeaturizerOptions, build_text_featurizer
from .schemas import DatasetSchema


class TaskKind(str, Enum):
    BINARY = "binary"
    MULTICLASS = "multiclass"


@dataclass(frozen=True)
class ColumnBinding:
    label: str
    text_columns: tuple[str, ...]

    @classmethod
    def from_schema(cls, schema: DatasetSchema, *, text_columns: tuple[str, ...] | None = None) -> ColumnBinding:
        columns = tuple(text_columns) if text_columns else tuple(schema.text_columns)
        for name in columns:
            if name not in schema.text_columns:
                raise ValueError(f"Column {name!r} is not a text column of the schema")
        return cls(label=schema.label, text_columns=columns)


@dataclass(frozen=True)
class TrainerOptions:
    c: float = 1.0
    max_iter: int = 1000
    class_weight: str | None = None


@dataclass(frozen=True)
class PipelineSpec:
    kind: TaskKind
    binding: ColumnBinding
    featurizer: FeaturizerOptions = field(default_factory=FeaturizerOptions)
    trainer: TrainerOptions = field(default_factory=TrainerOptions)
    # Holds the featurized training matrix in memory for the whole fit; unsuitable for very large datasets.
    cache_featurization: bool = False

    @classmethod
    def binary(cls, schema: DatasetSchema, **kwargs: Any) -> PipelineSpec:
        if schema.label_dtype != "bool":
            raise ValueError(f"Binary classification needs a boolean label, {schema.label!r} is {schema.label_dtype!r}")
        text_columns = kwargs.pop("text_columns", None)
        return cls(kind=TaskKind.BINARY, binding=ColumnBinding.from_schema(schema, text_columns=text_columns), **kwargs)

    @classmethod
    def multiclass(cls, schema: DatasetSchema, **kwargs: Any) -> PipelineSpec:
        if schema.label_dtype != "str":
            raise ValueError(f"Multiclass classification needs a string label, {schema.label!r} is {schema.label_dtype!r}")
        text_columns = kwargs.pop("text_columns", None)
        return cls(kind=TaskKind.MULTICLASS, binding=ColumnBinding.from_schema(schema, text_columns=text_columns), **kwargs)

    def with_trainer(self, **options: Any) -> PipelineSpec:
        return replace(self, trainer=replace(self.trainer, **options))


def _build_classifier(spec: PipelineSpec, seed: int) -> LogisticRegression:
    opts = spec.trainer
    if spec.kind is TaskKind.BINARY:
        return LogisticRegression(
            C=opts.c,
            max_iter=opts.max_iter,
            class_weight=opts.class_weight,
            solver="liblinear",
            random_state=seed,
        )
    # lbfgs fits a multinomial (maximum entropy) model over all classes.
    return LogisticRegression(
        C=opts.c,
        max_iter=opts.max_iter,
        class_weight=opts.class_weight,
        solver="lbfgs",
        random_state=seed,
    )


def build_estimator(spec: PipelineSpec, *, seed: int = 0) -> Pipeline:
    return Pipeline(
        steps=[
            ("featurizer", build_text_featurizer(spec.binding.text_columns, spec.featurizer)),
            ("clf", _build_classifier(spec, seed)),
        ]
    )
