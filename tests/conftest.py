"""
Pytest fixtures for the fetch client tests.

테스트 구성:
- 설정 fixture (default.yaml)
- dev_exchange: 개발용 FastAPI 앱에 ASGI로 연결된 HttpxExchange
- fake collaborator는 tests/fakes.py
"""

from collections.abc import AsyncGenerator
from pathlib import Path

import httpx
import pytest
import pytest_asyncio
import yaml

from src.app.clients import HttpxExchange

# =============================================================================
# Path / Config Fixtures
# =============================================================================

@pytest.fixture
def project_root() -> Path:
    """프로젝트 루트 경로."""
    return Path(__file__).parent.parent


@pytest.fixture
def default_config_path(project_root: Path) -> Path:
    """default.yaml 경로."""
    return project_root / "default.yaml"


@pytest.fixture
def default_config(default_config_path: Path) -> dict:
    """기본 설정 로드."""
    with open(default_config_path, encoding="utf-8") as f:
        return yaml.safe_load(f)


@pytest.fixture(autouse=True)
def _clear_base_url_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """로컬 .env 값이 설정 테스트에 섞이지 않도록."""
    monkeypatch.delenv("FETCH_BASE_URL", raising=False)


# =============================================================================
# Dev Server Fixtures
# =============================================================================

@pytest_asyncio.fixture
async def dev_exchange() -> AsyncGenerator[HttpxExchange, None]:
    """
    개발용 서버(src.app.main:app)에 ASGI로 연결된 HttpxExchange.

    네트워크 없이 실제 httpx 요청/응답 경로를 탐.
    """
    from src.app.main import app

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield HttpxExchange(client=client)
