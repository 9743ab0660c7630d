"""
Unit tests for the transformers engine binding.

transformers.pipeline is patched; no model is downloaded.
"""

from unittest.mock import MagicMock, patch

import pytest

from review_sentiment.engines.exceptions import EngineAcquisitionError
from review_sentiment.engines.transformers_engine import TransformersEngine, to_label_scores
from review_sentiment.models.sentiment_models import EngineDescriptor, LabelScore

PIPELINE_PATH = "review_sentiment.engines.transformers_engine.pipeline"


@pytest.fixture
def descriptor() -> EngineDescriptor:
    return EngineDescriptor(identifier="distilbert-base-uncased-finetuned-sst-2-english")


class TestToLabelScores:

    def test_flat_output_sorted(self):
        raw = [
            {"label": "NEGATIVE", "score": 0.1},
            {"label": "POSITIVE", "score": 0.9},
        ]

        result = to_label_scores(raw)

        assert [r.label for r in result] == ["POSITIVE", "NEGATIVE"]
        assert result[0].score == pytest.approx(0.9)

    def test_nested_output(self):
        raw = [[{"label": "1 star", "score": 0.7}, {"label": "5 stars", "score": 0.05}]]

        result = to_label_scores(raw)

        assert result[0] == LabelScore(label="1 star", score=0.7)
        assert len(result) == 2

    def test_single_dict(self):
        result = to_label_scores({"label": "joy", "score": 0.6})

        assert result == [LabelScore(label="joy", score=0.6)]

    def test_empty_output(self):
        assert to_label_scores([]) == []
        assert to_label_scores(None) == []

    def test_score_clamped(self):
        result = to_label_scores([{"label": "POSITIVE", "score": 1.0000001}])

        assert result[0].score == 1.0


class TestAcquire:

    @pytest.mark.asyncio
    async def test_acquire_without_token(self, descriptor):
        with patch(PIPELINE_PATH) as mock_pipeline:
            mock_pipeline.return_value = MagicMock()

            engine = await TransformersEngine.acquire(descriptor)

        mock_pipeline.assert_called_once_with(
            task="text-classification",
            model="distilbert-base-uncased-finetuned-sst-2-english",
        )
        assert engine.identifier == descriptor.identifier

    @pytest.mark.asyncio
    async def test_acquire_passes_token_and_device(self, descriptor):
        with patch(PIPELINE_PATH) as mock_pipeline:
            mock_pipeline.return_value = MagicMock()

            await TransformersEngine.acquire(descriptor, credential="hf_secret", device="cpu")

        kwargs = mock_pipeline.call_args.kwargs
        assert kwargs["token"] == "hf_secret"
        assert kwargs["device"] == "cpu"

    @pytest.mark.asyncio
    async def test_empty_token_not_passed(self, descriptor):
        with patch(PIPELINE_PATH) as mock_pipeline:
            mock_pipeline.return_value = MagicMock()

            await TransformersEngine.acquire(descriptor, credential="")

        assert "token" not in mock_pipeline.call_args.kwargs

    @pytest.mark.asyncio
    async def test_acquire_failure_wrapped(self, descriptor):
        with patch(PIPELINE_PATH, side_effect=OSError("Repository not found")):
            with pytest.raises(EngineAcquisitionError) as exc_info:
                await TransformersEngine.acquire(descriptor)

        error = exc_info.value
        assert "Repository not found" in error.message
        assert descriptor.identifier in error.message
        assert error.details["error_type"] == "OSError"
        assert isinstance(error.__cause__, OSError)


class TestClassify:

    @pytest.mark.asyncio
    async def test_classify_calls_pipeline(self, descriptor):
        classifier = MagicMock(return_value=[[
            {"label": "NEGATIVE", "score": 0.2},
            {"label": "POSITIVE", "score": 0.8},
        ]])
        engine = TransformersEngine(descriptor, classifier)

        result = await engine.classify("Love it")

        classifier.assert_called_once_with("Love it", top_k=None, truncation=True)
        assert result[0] == LabelScore(label="POSITIVE", score=0.8)

    @pytest.mark.asyncio
    async def test_classify_error_propagates(self, descriptor):
        classifier = MagicMock(side_effect=RuntimeError("CUDA out of memory"))
        engine = TransformersEngine(descriptor, classifier)

        with pytest.raises(RuntimeError):
            await engine.classify("text")


def test_repr(descriptor):
    engine = TransformersEngine(descriptor, MagicMock())

    assert repr(engine) == (
        "TransformersEngine(identifier=distilbert-base-uncased-finetuned-sst-2-english)"
    )
