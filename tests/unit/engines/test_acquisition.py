"""
Unit tests for descriptor building and uniform engine acquisition.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from review_sentiment.config import Settings
from review_sentiment.engines.acquisition import (
    acquire_engine,
    acquirer_from_settings,
    build_descriptors,
)
from review_sentiment.engines.exceptions import EngineAcquisitionError
from review_sentiment.models.enums import EngineBackend
from review_sentiment.models.sentiment_models import EngineDescriptor

ACQUIRE_PATH = "review_sentiment.engines.acquisition.TransformersEngine.acquire"


def test_build_descriptors_preserves_order():
    descriptors = build_descriptors(["a/model", "b/model", "c/model"], auth_required=["b/model"])

    assert [d.identifier for d in descriptors] == ["a/model", "b/model", "c/model"]
    assert [d.requires_auth for d in descriptors] == [False, True, False]
    assert all(d.backend == EngineBackend.TRANSFORMERS for d in descriptors)


def test_build_descriptors_empty():
    assert build_descriptors([]) == []


@pytest.mark.asyncio
async def test_auth_required_without_credential_skipped():
    descriptor = EngineDescriptor(identifier="gated/model", requires_auth=True)

    with patch(ACQUIRE_PATH, new_callable=AsyncMock) as mock_acquire:
        with pytest.raises(EngineAcquisitionError) as exc_info:
            await acquire_engine(descriptor, credential=None)

    mock_acquire.assert_not_called()
    assert exc_info.value.details["reason"] == "credential_missing"


@pytest.mark.asyncio
async def test_auth_required_with_credential_acquired():
    descriptor = EngineDescriptor(identifier="gated/model", requires_auth=True)
    engine = MagicMock()

    with patch(ACQUIRE_PATH, new_callable=AsyncMock, return_value=engine) as mock_acquire:
        result = await acquire_engine(descriptor, credential="hf_token")

    assert result is engine
    mock_acquire.assert_awaited_once_with(
        descriptor, credential="hf_token", task="text-classification", device=None
    )


@pytest.mark.asyncio
async def test_acquirer_from_settings_binds_task_and_device():
    settings = Settings(ENGINE_TASK="sentiment-analysis", ENGINE_DEVICE="cpu")
    descriptor = EngineDescriptor(identifier="a/model")
    acquirer = acquirer_from_settings(settings)

    with patch(ACQUIRE_PATH, new_callable=AsyncMock) as mock_acquire:
        await acquirer(descriptor, None)

    mock_acquire.assert_awaited_once_with(
        descriptor, credential=None, task="sentiment-analysis", device="cpu"
    )
