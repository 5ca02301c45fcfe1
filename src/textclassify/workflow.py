# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
"""One complete run: load, declare, fit, evaluate, predict."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .console import MLConsole
from .env import RunSettings
from .evaluation.evaluate import BinaryMetrics, MulticlassMetrics, evaluate
from .inference.predictor import Predictor
from .schemas import PredictionResult
from .tasks import TaskDefinition
from .training.dataset import TrainTestData, load_dataset, train_test_split
from .training.trainer import TrainedModel, save_model, train_model


@dataclass
class WorkflowResult:
    model: TrainedModel
    metrics: BinaryMetrics | MulticlassMetrics
    predictions: list[PredictionResult] = field(default_factory=list)
    train_rows: int = 0
    test_rows: int = 0
    paths: dict[str, Any] = field(default_factory=dict)


def _resolve(path: Path | None, settings: RunSettings, default_name: str) -> Path:
    if path is not None:
        return Path(path)
    return settings.data_dir / default_name


def load_partitions(task: TaskDefinition, settings: RunSettings, console: MLConsole) -> TrainTestData:
    schema = task.record_type.SCHEMA
    data_path = _resolve(settings.data_path, settings, task.data_file)
    console.info(f"Loading {data_path}")
    frame = load_dataset(data_path, schema, has_header=task.has_header)

    # An explicit --test-data, or the task's own test file when running on default paths.
    test_path = settings.test_data_path
    if test_path is None and settings.data_path is None and task.test_file:
        test_path = settings.data_dir / task.test_file
    if test_path is not None:
        console.info(f"Loading test set {test_path}")
        return TrainTestData(train_set=frame, test_set=load_dataset(test_path, schema, has_header=task.has_header))

    console.info(f"Splitting {len(frame)} rows, test fraction {settings.test_fraction:.0%}, seed {settings.seed}")
    return train_test_split(frame, test_fraction=settings.test_fraction, seed=settings.seed)


def run_workflow(task: TaskDefinition, settings: RunSettings, console: MLConsole | None = None) -> WorkflowResult:
    console = console or MLConsole(color=settings.color)
    partitions = load_partitions(task, settings, console)

    console.section("Create and Train the Model")
    model = train_model(task.spec, partitions.train_set, seed=settings.seed, console=console)
    console.section("Training Complete")

    console.section("Evaluating Model Accuracy with Test Data")
    metrics = evaluate(model, partitions.test_set, console=console)
    console.metrics_table(metrics.as_dict(), title="Model Quality Metrics Evaluation")
    console.section("End of Model Evaluation")

    paths: dict[str, Any] = {}
    if settings.model_path is not None:
        paths = save_model(model, settings.model_path)
        console.success(f"Model saved to {paths['model']}")

    samples = text_inputs(task, settings.samples) if settings.samples else list(task.samples)
    predictions: list[PredictionResult] = []
    if samples:
        console.section("Prediction Test of Model with Multiple Samples")
        predictor = Predictor(model, label_names=task.label_names)
        predictions = predictor.predict_batch(samples)
        console.predictions_table(predictions)
        console.section("End of Predictions")

    return WorkflowResult(
        model=model,
        metrics=metrics,
        predictions=predictions,
        train_rows=len(partitions.train_set),
        test_rows=len(partitions.test_set),
        paths=paths,
    )


def text_inputs(task: TaskDefinition, texts: list[str] | tuple[str, ...]) -> list[Any]:
    """Free-form texts as predictor inputs; multi-column tasks get them in their first text column."""
    columns = task.spec.binding.text_columns
    if len(columns) == 1:
        return list(texts)
    return [{columns[0]: text} for text in texts]
