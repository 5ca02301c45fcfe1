# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .pipeline import PipelineSpec
from .schemas import GitHubIssue, PageData, SentimentData


@dataclass(frozen=True)
class TaskDefinition:
    name: str
    description: str
    record_type: type
    spec: PipelineSpec
    data_file: str
    has_header: bool = False
    test_file: str | None = None
    samples: tuple[Any, ...] = ()
    label_names: dict[Any, str] = field(default_factory=dict)


ISSUES = TaskDefinition(
    name="issues",
    description="GitHub issue area classification (multiclass)",
    record_type=GitHubIssue,
    spec=PipelineSpec.multiclass(GitHubIssue.SCHEMA, cache_featurization=True),
    data_file="issues_train.tsv",
    test_file="issues_test.tsv",
    has_header=True,
    samples=(
        {
            "title": "WebSockets communication is slow in my machine",
            "description": "The WebSockets communication used under the covers by SignalR looks like is going slow in my development machine..",
        },
    ),
)

DIAGNOSIS = TaskDefinition(
    name="diagnosis",
    description="Medical record page carries a diagnosis (binary)",
    record_type=PageData,
    spec=PipelineSpec.binary(PageData.SCHEMA),
    data_file="APS_Pages.txt",
    samples=(
        "Assessment: patient diagnosed with type 2 diabetes mellitus, start metformin.",
        "Patient name and address updated. Next appointment scheduled for March.",
    ),
    label_names={True: "Diagnosis", False: "No diagnosis"},
)

SENTIMENT = TaskDefinition(
    name="sentiment",
    description="Restaurant review sentiment (binary)",
    record_type=SentimentData,
    spec=PipelineSpec.binary(SentimentData.SCHEMA),
    data_file="yelp_labelled.txt",
    samples=(
        "This was a very bad steak",
        "This was a horrible meal",
        "I love this spaghetti.",
    ),
    label_names={True: "Positive", False: "Negative"},
)

TASKS: dict[str, TaskDefinition] = {task.name: task for task in (ISSUES, DIAGNOSIS, SENTIMENT)}


def get_task(name: str) -> TaskDefinition:
    try:
        return TASKS[name]
    except KeyError:
        raise KeyError(f"Unknown task {name!r}; available: {', '.join(sorted(TASKS))}") from None
