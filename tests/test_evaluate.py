"""Tests for model quality metrics."""

import pandas as pd
import pytest

from textclassify.console import MLConsole
from textclassify.errors import TextClassifyError
from textclassify.evaluation.evaluate import BinaryMetrics, MulticlassMetrics, evaluate, evaluate_binary, evaluate_multiclass
from textclassify.pipeline import PipelineSpec
from textclassify.schemas import GitHubIssue, SentimentData
from textclassify.training.dataset import train_test_split
from textclassify.training.trainer import train_model


@pytest.fixture
def sentiment_split(sentiment_frame: pd.DataFrame):
    return train_test_split(sentiment_frame, test_fraction=0.2, seed=0)


@pytest.fixture
def sentiment_model(sentiment_split):
    return train_model(PipelineSpec.binary(SentimentData.SCHEMA), sentiment_split.train_set, seed=0)


class TestBinaryMetrics:
    """Tests for accuracy, AUC and F1 on binary models."""

    def test_metrics_in_unit_range(self, sentiment_model, sentiment_split) -> None:
        """Test that ratio metrics lie in [0, 1]."""
        metrics = evaluate_binary(sentiment_model, sentiment_split.test_set)
        for name in ("accuracy", "auc", "f1", "precision", "recall"):
            assert 0.0 <= getattr(metrics, name) <= 1.0
        assert metrics.log_loss >= 0.0

    def test_separable_data_scores_well(self, sentiment_model, sentiment_split) -> None:
        """Test that held-out reviews with known vocabulary are mostly right."""
        metrics = evaluate_binary(sentiment_model, sentiment_split.test_set)
        assert metrics.accuracy >= 0.8
        assert metrics.auc >= 0.8

    def test_single_class_test_set(self, sentiment_model, sentiment_split) -> None:
        """Test that AUC falls back to zero when only one class is present."""
        positives = sentiment_split.test_set[sentiment_split.test_set["sentiment"]]
        metrics = evaluate_binary(sentiment_model, positives)
        assert metrics.auc == 0.0
        assert 0.0 <= metrics.accuracy <= 1.0

    def test_display_names(self) -> None:
        """Test the names used for console output."""
        metrics = BinaryMetrics(accuracy=0.9, auc=0.95, f1=0.88, precision=0.9, recall=0.86, log_loss=0.3)
        assert list(metrics.as_dict())[:3] == ["Accuracy", "AreaUnderRocCurve", "F1Score"]

    def test_empty_test_set(self, sentiment_model, sentiment_split) -> None:
        """Test that evaluating nothing is an error."""
        with pytest.raises(TextClassifyError, match="empty"):
            evaluate_binary(sentiment_model, sentiment_split.test_set.iloc[0:0])


class TestMulticlassMetrics:
    """Tests for micro/macro accuracy and log loss."""

    def test_metrics(self, issues_train: pd.DataFrame, issues_test: pd.DataFrame) -> None:
        """Test the multiclass metric ranges."""
        model = train_model(PipelineSpec.multiclass(GitHubIssue.SCHEMA), issues_train)
        metrics = evaluate(model, issues_test)
        assert isinstance(metrics, MulticlassMetrics)
        assert 0.0 <= metrics.micro_accuracy <= 1.0
        assert 0.0 <= metrics.macro_accuracy <= 1.0
        assert metrics.log_loss >= 0.0
        assert metrics.log_loss_reduction <= 1.0

    def test_unseen_labels_count_as_errors(self, issues_train: pd.DataFrame, issues_test: pd.DataFrame, capsys) -> None:
        """Test that test rows with unseen labels are reported and scored wrong."""
        model = train_model(PipelineSpec.multiclass(GitHubIssue.SCHEMA), issues_train)
        relabelled = issues_test.copy()
        relabelled.loc[0, "area"] = "area-Meta"
        metrics = evaluate_multiclass(model, relabelled, console=MLConsole(enabled=False))
        assert "unseen during training" in capsys.readouterr().out
        assert metrics.micro_accuracy <= (len(relabelled) - 1) / len(relabelled)

    def test_only_unseen_labels(self, issues_train: pd.DataFrame, issues_test: pd.DataFrame) -> None:
        """Test that log loss is zero when no test label is known."""
        model = train_model(PipelineSpec.multiclass(GitHubIssue.SCHEMA), issues_train)
        relabelled = issues_test.assign(area="area-Meta")
        metrics = evaluate_multiclass(model, relabelled)
        assert metrics.micro_accuracy == 0.0
        assert metrics.log_loss == 0.0
