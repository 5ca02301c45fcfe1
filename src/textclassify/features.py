# -*- coding: utf-8 -*-
# SPDX-License-Identifier: MPL-2.0
# Copyright (c) 2026 muffydu37
from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass
from typing import Sequence

from sklearn.compose import ColumnTransformer
from sklearn.feature_extraction.text import TfidfVectorizer

NON_WORD_RE = re.compile(r"[^\w\s]", flags=re.UNICODE)
SPACE_RE = re.compile(r"\s+")


def _safe_text(value: object) -> str:
    if value is None:
        return ""
    return str(value)


def normalize_text(value: object) -> str:
    text = unicodedata.normalize("NFKD", _safe_text(value))
    text = "".join(char for char in text if not unicodedata.combining(char))
    text = NON_WORD_RE.sub(" ", text.lower())
    return SPACE_RE.sub(" ", text).strip()


@dataclass(frozen=True)
class FeaturizerOptions:
    word_ngrams: tuple[int, int] = (1, 2)
    char_ngrams: tuple[int, int] = (3, 3)
    min_df: int = 1
    max_features: int | None = None


def build_text_featurizer(text_columns: Sequence[str], options: FeaturizerOptions | None = None) -> ColumnTransformer:
    """Featurize every text column on its own and concatenate the vectors.

    Each column gets a word n-gram and a character n-gram TF-IDF block, both
    L2 normalised; the column transformer stacks all blocks side by side into
    the single feature matrix consumed by the trainer.
    """
    opts = options or FeaturizerOptions()
    transformers = []
    for column in text_columns:
        transformers.append(
            (
                f"{column}_word",
                TfidfVectorizer(
                    analyzer="word",
                    preprocessor=normalize_text,
                    ngram_range=opts.word_ngrams,
                    min_df=opts.min_df,
                    max_features=opts.max_features,
                ),
                column,
            )
        )
        transformers.append(
            (
                f"{column}_char",
                TfidfVectorizer(
                    analyzer="char_wb",
                    preprocessor=normalize_text,
                    ngram_range=opts.char_ngrams,
                    min_df=opts.min_df,
                    max_features=opts.max_features,
                ),
                column,
            )
        )
    return ColumnTransformer(transformers=transformers, sparse_threshold=1.0)
