# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import asdict, is_dataclass
from typing import Any

import pandas as pd

from ..errors import TextClassifyError
from ..pipeline import TaskKind
from ..schemas import PredictionResult
from ..training.trainer import TrainedModel


class Predictor:
    """Single and batch inference over a trained model.

    Inputs can be record instances, mappings of text fields, or plain strings
    when the model reads a single text column. Labels on the inputs are ignored.
    """

    def __init__(self, model: TrainedModel, *, label_names: Mapping[Any, str] | None = None) -> None:
        self.model = model
        self.text_columns = model.spec.binding.text_columns
        self.label_names = dict(label_names or {})

    def _as_row(self, example: Any) -> dict[str, str]:
        if isinstance(example, str):
            if len(self.text_columns) != 1:
                raise TextClassifyError(f"Plain text input needs a single-text model, this one reads {list(self.text_columns)}")
            return {self.text_columns[0]: example}
        if is_dataclass(example) and not isinstance(example, type):
            payload: Mapping[str, Any] = asdict(example)
        elif isinstance(example, Mapping):
            payload = example
        else:
            raise TextClassifyError(f"Unsupported prediction input type: {type(example).__name__}")
        return {column: str(payload.get(column) or "") for column in self.text_columns}

    def render_label(self, label: Any) -> str:
        if label in self.label_names:
            return self.label_names[label]
        return str(label)

    def predict(self, example: Any) -> PredictionResult:
        return self.predict_batch([example])[0]

    def predict_batch(self, examples: Sequence[Any]) -> list[PredictionResult]:
        rows = [self._as_row(example) for example in examples]
        if not rows:
            return []
        frame = pd.DataFrame(rows, columns=list(self.text_columns))
        scored = self.model.transform(frame)
        results: list[PredictionResult] = []
        for row, (_idx, item) in zip(rows, scored.iterrows()):
            label = item["predicted_label"]
            if self.model.kind is TaskKind.BINARY:
                label = bool(label)
            results.append(
                PredictionResult(
                    text=row,
                    predicted_label=label,
                    probability=float(item["probability"]),
                    score=float(item["score"]),
                    label_text=self.render_label(label),
                )
            )
        return results
