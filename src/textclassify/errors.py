# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations


class TextClassifyError(RuntimeError):
    """Base class for fatal errors raised by a classification run."""


class DatasetError(TextClassifyError):
    """Missing dataset file or a row that does not match the column schema."""


class TrainingError(TextClassifyError):
    """Training partition cannot produce a model (empty, single class)."""


class LabelDomainError(TextClassifyError):
    """Numeric label key without a label observed at training time."""
