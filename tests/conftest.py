"""
Shared pytest fixtures for the frame handler tests.
"""

from typing import Callable, Optional

import pytest
from fastapi.testclient import TestClient

from starframe.config import FrameConfig, load_config
from starframe.deps import get_market_fetcher
from starframe.main import create_app
from tests.fakes import FakeSession


@pytest.fixture
def fake_session_factory() -> Callable[..., FakeSession]:
    return FakeSession


@pytest.fixture
def dexscreener_payload():
    def _payload(market_cap):
        return {"schemaVersion": "1.0.0", "pair": {"chainId": "base", "marketCap": market_cap}}

    return _payload


# ============================================================================
# App fixtures
# ============================================================================

@pytest.fixture
def frame_config() -> FrameConfig:
    return load_config({})


@pytest.fixture
def make_client(frame_config):
    def _make(config: Optional[FrameConfig] = None, caps: Optional[dict] = None) -> TestClient:
        app = create_app(config if config is not None else frame_config)
        if caps is not None:
            async def _fixed_fetch(cfg):
                return dict(caps)

            app.dependency_overrides[get_market_fetcher] = lambda: _fixed_fetch
        return TestClient(app, raise_server_exceptions=False)

    return _make
