# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import argparse
from pathlib import Path

from .console import MLConsole
from .env import RunSettings, get_bool_env
from .errors import TextClassifyError
from .inference.predictor import Predictor
from .tasks import TASKS, get_task
from .training.trainer import load_model
from .workflow import run_workflow, text_inputs


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="textclassify", description="Train, evaluate and try out text classifiers.")
    parser.add_argument("--no-color", action="store_true", help="Plain console output")
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="Load, train, evaluate and predict for one task")
    run.add_argument("task", choices=sorted(TASKS))
    run.add_argument("--data", type=Path, help="Dataset file (default: $ML_DATA_DIR/<task file>)")
    run.add_argument("--test-data", type=Path, help="Separate test file instead of a random split")
    run.add_argument("--test-fraction", type=float, help="Share of rows held out for evaluation")
    run.add_argument("--seed", type=int, help="Seed for the split and the trainer")
    run.add_argument(
        "--save-model",
        nargs="?",
        const="",
        metavar="PATH",
        help="Write the trained model archive (default: $ML_MODEL_DIR/<task>.joblib)",
    )
    run.add_argument("--predict", nargs="+", metavar="TEXT", help="Texts to classify after evaluation")

    predict = sub.add_parser("predict", help="Classify texts with a saved model")
    predict.add_argument("task", choices=sorted(TASKS))
    predict.add_argument("--model", type=Path, help="Model archive (default: $ML_MODEL_DIR/<task>.joblib)")
    predict.add_argument("texts", nargs="+", metavar="TEXT")

    sub.add_parser("tasks", help="List available tasks")
    return parser.parse_args(argv)


def _settings(args: argparse.Namespace) -> RunSettings:
    settings = RunSettings.from_env()
    if args.no_color:
        settings.color = False
    if args.data is not None:
        settings.data_path = args.data
    if args.test_data is not None:
        settings.test_data_path = args.test_data
    if args.test_fraction is not None:
        if not 0.0 < args.test_fraction < 1.0:
            raise TextClassifyError(f"--test-fraction must be in (0, 1), got {args.test_fraction}")
        settings.test_fraction = args.test_fraction
    if args.seed is not None:
        settings.seed = args.seed
    if args.save_model is not None:
        settings.model_path = Path(args.save_model) if args.save_model else settings.model_dir / f"{args.task}.joblib"
    if args.predict:
        settings.samples = tuple(args.predict)
    return settings


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    console = MLConsole(color=not (args.no_color or get_bool_env("ML_NO_COLOR", False)))

    if args.command == "tasks":
        for name in sorted(TASKS):
            console.info(f"{name}: {TASKS[name].description}")
        return 0

    task = get_task(args.task)
    try:
        if args.command == "run":
            settings = _settings(args)
            console.banner()
            result = run_workflow(task, settings, console)
            console.success(f"{task.name}: trained on {result.train_rows} rows, evaluated on {result.test_rows}")
            return 0

        model_path = args.model or RunSettings.from_env().model_dir / f"{task.name}.joblib"
        model = load_model(model_path)
        if model.kind is not task.spec.kind:
            raise TextClassifyError(f"{model_path} holds a {model.kind.value} model, task {task.name!r} is {task.spec.kind.value}")
        predictor = Predictor(model, label_names=task.label_names)
        console.predictions_table(predictor.predict_batch(text_inputs(task, args.texts)))
        return 0
    except TextClassifyError as exc:
        console.error(str(exc))
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
