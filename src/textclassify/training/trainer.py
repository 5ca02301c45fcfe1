# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable

import joblib
import numpy as np
import pandas as pd
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import LabelEncoder

from ..console import MLConsole
from ..errors import LabelDomainError, TextClassifyError, TrainingError
from ..pipeline import PipelineSpec, TaskKind, build_estimator

PREDICTION_COLUMNS = ["predicted_label", "probability", "score"]


def _iso_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")


@dataclass(frozen=True)
class TrainedModel:
    """Fitted pipeline plus the label values behind each numeric key.

    ``classes[key]`` is the original label for classifier key ``key``; for
    binary models it is ``(False, True)``.
    """

    spec: PipelineSpec
    pipeline: Pipeline
    classes: tuple[Any, ...]
    train_accuracy: float | None = None

    @property
    def kind(self) -> TaskKind:
        return self.spec.kind

    def features_frame(self, frame: pd.DataFrame) -> pd.DataFrame:
        missing = [name for name in self.spec.binding.text_columns if name not in frame.columns]
        if missing:
            raise TextClassifyError(f"Input is missing text column(s): {', '.join(missing)}")
        return frame[list(self.spec.binding.text_columns)].fillna("").astype(str)

    def encode_labels(self, labels: Iterable[Any]) -> np.ndarray:
        lookup = {value: key for key, value in enumerate(self.classes)}
        keys = []
        for label in labels:
            if label not in lookup:
                raise LabelDomainError(f"Label {label!r} was not seen during training")
            keys.append(lookup[label])
        return np.asarray(keys, dtype=int)

    def decode_labels(self, keys: Iterable[int]) -> list[Any]:
        values = []
        for key in keys:
            index = int(key)
            if not 0 <= index < len(self.classes):
                raise LabelDomainError(f"Key {index} has no label (known keys: 0..{len(self.classes) - 1})")
            values.append(self.classes[index])
        return values

    def predict_proba(self, frame: pd.DataFrame) -> np.ndarray:
        return self.pipeline.predict_proba(self.features_frame(frame))

    def transform(self, frame: pd.DataFrame) -> pd.DataFrame:
        """Score every row; the result is index-aligned with ``frame``."""
        if frame.empty:
            return pd.DataFrame(columns=PREDICTION_COLUMNS, index=frame.index)

        featurizer = self.pipeline[:-1]
        clf = self.pipeline[-1]
        features = featurizer.transform(self.features_frame(frame))
        proba = clf.predict_proba(features)
        raw = clf.decision_function(features)

        if self.kind is TaskKind.BINARY:
            predicted = [bool(value) for value in raw > 0]
            probability = proba[:, 1]
            score = raw
        else:
            if raw.ndim == 1:
                # Two-class fits report a single margin for the second class.
                raw = np.column_stack([-raw, raw])
            keys = np.argmax(proba, axis=1)
            predicted = self.decode_labels(keys)
            rows = np.arange(len(keys))
            probability = proba[rows, keys]
            score = raw[rows, keys]

        return pd.DataFrame(
            {
                "predicted_label": predicted,
                "probability": np.asarray(probability, dtype=float),
                "score": np.asarray(score, dtype=float),
            },
            index=frame.index,
        )


def _targets(spec: PipelineSpec, frame: pd.DataFrame) -> tuple[np.ndarray, tuple[Any, ...]]:
    labels = frame[spec.binding.label]
    if spec.kind is TaskKind.BINARY:
        y = labels.astype(bool).to_numpy()
        return y, (False, True)
    encoder = LabelEncoder()
    y = encoder.fit_transform(labels.astype(str))
    return y, tuple(str(value) for value in encoder.classes_)


def _fit(pipeline: Pipeline, x: pd.DataFrame, y: np.ndarray) -> Pipeline:
    try:
        return pipeline.fit(x, y)
    except ValueError as exc:
        raise TrainingError(f"Model fitting failed: {exc}") from exc


def _fit_checkpointed(pipeline: Pipeline, x: pd.DataFrame, y: np.ndarray) -> tuple[Pipeline, float]:
    """Featurize once, then let the trainer and the training-set check share the matrix."""
    featurizer = pipeline.named_steps["featurizer"]
    clf = pipeline.named_steps["clf"]
    try:
        features = featurizer.fit_transform(x, y)
        clf.fit(features, y)
    except ValueError as exc:
        raise TrainingError(f"Model fitting failed: {exc}") from exc
    return pipeline, float(clf.score(features, y))


def train_model(
    spec: PipelineSpec,
    train_set: pd.DataFrame,
    *,
    seed: int = 0,
    console: MLConsole | None = None,
) -> TrainedModel:
    if train_set.empty:
        raise TrainingError("Training partition is empty")
    required = [spec.binding.label, *spec.binding.text_columns]
    missing = [name for name in required if name not in train_set.columns]
    if missing:
        raise TrainingError(f"Training partition is missing column(s): {', '.join(missing)}")

    y, classes = _targets(spec, train_set)
    observed = np.unique(y)
    if len(observed) < 2:
        raise TrainingError(f"Training partition holds a single class ({observed.tolist()}); need at least two")

    x = train_set[list(spec.binding.text_columns)].fillna("").astype(str)
    if console:
        console.info(f"Fitting {spec.kind.value} pipeline on {len(train_set)} rows, {len(observed)} classes")

    train_accuracy = None
    if spec.cache_featurization:
        pipeline, train_accuracy = _fit_checkpointed(build_estimator(spec, seed=seed), x, y)
        if console:
            console.info(f"Training set accuracy from cached features: {train_accuracy:.2%}")
    else:
        pipeline = _fit(build_estimator(spec, seed=seed), x, y)

    if spec.kind is TaskKind.BINARY:
        # liblinear orders classes ascending, so keys line up with (False, True).
        classes = tuple(bool(value) for value in pipeline[-1].classes_)
    return TrainedModel(spec=spec, pipeline=pipeline, classes=classes, train_accuracy=train_accuracy)


def _metadata_path(path: Path) -> Path:
    return path.with_name(f"{path.stem}.metadata.json")


def save_model(model: TrainedModel, path: Path | str) -> dict[str, Any]:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    joblib.dump(model, target)
    metadata = {
        "created_at_utc": _iso_now(),
        "kind": model.kind.value,
        "label": model.spec.binding.label,
        "text_columns": list(model.spec.binding.text_columns),
        "classes": [value if isinstance(value, str) else bool(value) for value in model.classes],
    }
    _metadata_path(target).write_text(json.dumps(metadata, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
    return {"model": str(target), "metadata": str(_metadata_path(target)), **metadata}


def load_model(path: Path | str) -> TrainedModel:
    source = Path(path)
    if not source.is_file():
        raise TextClassifyError(f"Model archive not found: {source}")
    model = joblib.load(source)
    if not isinstance(model, TrainedModel):
        raise TextClassifyError(f"{source} does not contain a trained text classifier")
    return model
