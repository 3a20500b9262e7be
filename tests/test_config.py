"""Tests for junction.config — DispatcherConfig frozen dataclass."""

import dataclasses

import pytest

from junction.config import DispatcherConfig


class TestDispatcherConfig:
    def test_defaults(self) -> None:
        cfg = DispatcherConfig()

        assert cfg.debug is False
        assert cfg.default_content_type == "application/json"
        assert cfg.not_found_message == "Not Found"
        assert cfg.error_fallback_message == "An unexpected error occurred."
        assert cfg.offload_sync is False

    def test_override(self) -> None:
        cfg = DispatcherConfig(debug=True, default_content_type="text/plain")

        assert cfg.debug is True
        assert cfg.default_content_type == "text/plain"

    def test_frozen(self) -> None:
        cfg = DispatcherConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            cfg.debug = True  # type: ignore[misc]

    async def test_not_found_message_used_by_dispatcher(self) -> None:
        from junction.dispatcher import Dispatcher
        from junction.testing import TestClient

        dispatcher = Dispatcher(DispatcherConfig(not_found_message="No such route"))
        response = await TestClient(dispatcher).get("/")
        assert response.json() == {"error": "No such route"}
