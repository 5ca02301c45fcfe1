# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np
import pandas as pd
from sklearn.metrics import accuracy_score, f1_score, log_loss, precision_score, recall_score, roc_auc_score

from ..console import MLConsole
from ..errors import TextClassifyError
from ..pipeline import TaskKind
from ..training.trainer import TrainedModel


@dataclass(frozen=True)
class BinaryMetrics:
    accuracy: float
    auc: float
    f1: float
    precision: float
    recall: float
    log_loss: float

    def as_dict(self) -> dict[str, float]:
        return {
            "Accuracy": self.accuracy,
            "AreaUnderRocCurve": self.auc,
            "F1Score": self.f1,
            "Precision": self.precision,
            "Recall": self.recall,
            "LogLoss": self.log_loss,
        }


@dataclass(frozen=True)
class MulticlassMetrics:
    micro_accuracy: float
    macro_accuracy: float
    log_loss: float
    log_loss_reduction: float

    def as_dict(self) -> dict[str, float]:
        return {
            "MicroAccuracy": self.micro_accuracy,
            "MacroAccuracy": self.macro_accuracy,
            "LogLoss": self.log_loss,
            "LogLossReduction": self.log_loss_reduction,
        }


def _check_test_set(model: TrainedModel, test_set: pd.DataFrame) -> None:
    if test_set.empty:
        raise TextClassifyError("Test partition is empty")
    if model.spec.binding.label not in test_set.columns:
        raise TextClassifyError(f"Test partition has no label column {model.spec.binding.label!r}")


def _safe_auc(y_true: np.ndarray, y_prob: np.ndarray) -> float:
    if len(np.unique(y_true)) < 2:
        return 0.0
    value = float(roc_auc_score(y_true, y_prob))
    return 0.0 if math.isnan(value) else value


def evaluate_binary(model: TrainedModel, test_set: pd.DataFrame) -> BinaryMetrics:
    _check_test_set(model, test_set)
    y_true = test_set[model.spec.binding.label].astype(bool).to_numpy()
    predictions = model.transform(test_set)
    y_pred = predictions["predicted_label"].astype(bool).to_numpy()
    y_prob = predictions["probability"].astype(float).to_numpy()
    return BinaryMetrics(
        accuracy=float(accuracy_score(y_true, y_pred)),
        auc=_safe_auc(y_true, y_prob),
        f1=float(f1_score(y_true, y_pred, zero_division=0)),
        precision=float(precision_score(y_true, y_pred, zero_division=0)),
        recall=float(recall_score(y_true, y_pred, zero_division=0)),
        log_loss=float(log_loss(y_true, y_prob, labels=[False, True])),
    )


def evaluate_multiclass(model: TrainedModel, test_set: pd.DataFrame, *, console: MLConsole | None = None) -> MulticlassMetrics:
    """Micro/macro accuracy and log loss of a multiclass model.

    Test labels never seen at training time cannot be predicted: they count as
    errors for both accuracies and are left out of the log-loss terms.
    """
    _check_test_set(model, test_set)
    actual = test_set[model.spec.binding.label].astype(str).to_numpy()
    predicted = model.transform(test_set)["predicted_label"].astype(str).to_numpy()

    micro = float(np.mean(actual == predicted))
    per_class = [float(np.mean(predicted[actual == label] == label)) for label in np.unique(actual)]
    macro = float(np.mean(per_class))

    known = np.isin(actual, np.asarray(model.classes, dtype=object))
    unseen = int((~known).sum())
    if unseen and console:
        console.warn(f"{unseen} test row(s) carry labels unseen during training")
    if not known.any():
        return MulticlassMetrics(micro_accuracy=micro, macro_accuracy=macro, log_loss=0.0, log_loss_reduction=0.0)

    keys = model.encode_labels(actual[known])
    proba = model.predict_proba(test_set.loc[known])
    loss = float(log_loss(keys, proba, labels=list(range(len(model.classes)))))

    counts = np.bincount(keys, minlength=len(model.classes)).astype(float)
    prior = counts[counts > 0] / counts.sum()
    prior_loss = float(-(prior * np.log(prior)).sum())
    reduction = (prior_loss - loss) / prior_loss if prior_loss > 0 else 0.0
    return MulticlassMetrics(micro_accuracy=micro, macro_accuracy=macro, log_loss=loss, log_loss_reduction=float(reduction))


def evaluate(model: TrainedModel, test_set: pd.DataFrame, *, console: MLConsole | None = None) -> BinaryMetrics | MulticlassMetrics:
    if model.kind is TaskKind.BINARY:
        return evaluate_binary(model, test_set)
    return evaluate_multiclass(model, test_set, console=console)
