# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
"""Text classification workflows: issue areas, diagnosis pages, review sentiment."""

from .inference.predictor import Predictor
from .pipeline import PipelineSpec, TaskKind
from .schemas import GitHubIssue, PageData, PredictionResult, SentimentData
from .training.trainer import TrainedModel, load_model, save_model, train_model
from .workflow import WorkflowResult, run_workflow

__all__ = [
    "GitHubIssue",
    "PageData",
    "SentimentData",
    "PredictionResult",
    "PipelineSpec",
    "TaskKind",
    "TrainedModel",
    "Predictor",
    "train_model",
    "save_model",
    "load_model",
    "run_workflow",
    "WorkflowResult",
]
