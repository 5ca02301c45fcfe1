# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

TRUE_VALUES = {"1", "true", "yes", "on", "y"}
FALSE_VALUES = {"0", "false", "no", "off", "n"}


def get_env(name: str, default: str | None = None) -> str | None:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    return value.strip()


def get_int_env(name: str, default: int) -> int:
    raw = get_env(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def get_float_env(name: str, default: float) -> float:
    raw = get_env(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def get_bool_env(name: str, default: bool) -> bool:
    raw = get_env(name)
    if raw is None:
        return default
    lowered = raw.lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    return default


def _clamp_fraction(value: float, default: float) -> float:
    if not 0.0 < value < 1.0:
        return default
    return value


@dataclass
class RunSettings:
    data_dir: Path = Path("data")
    model_dir: Path = Path("models")
    seed: int = 0
    test_fraction: float = 0.2
    color: bool = True
    data_path: Path | None = None
    test_data_path: Path | None = None
    model_path: Path | None = None
    samples: tuple[str, ...] = ()

    @classmethod
    def from_env(cls) -> RunSettings:
        return cls(
            data_dir=Path(get_env("ML_DATA_DIR", "data") or "data"),
            model_dir=Path(get_env("ML_MODEL_DIR", "models") or "models"),
            seed=get_int_env("ML_SEED", 0),
            test_fraction=_clamp_fraction(get_float_env("ML_TEST_FRACTION", 0.2), 0.2),
            color=not get_bool_env("ML_NO_COLOR", False),
        )
