"""
Configuration: default.yaml 로드와 클라이언트 설정.

우선순위: 환경변수 (FETCH_BASE_URL) > default.yaml > 내장 기본값
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from src.domain.constants import (
    DEFAULT_BASE_URL,
    DEFAULT_STUB_METHOD,
    DEFAULT_TIMEOUT_SECONDS,
    ECHO_PATH,
    LOGIN_PATH,
    REGISTER_PATH,
    USER_PROFILE_PATH,
)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "default.yaml"

BASE_URL_ENV = "FETCH_BASE_URL"


def load_config(config_path: Path | None = None) -> dict:
    """설정 파일 로드."""
    if config_path is None:
        # 프로젝트 루트의 default.yaml
        config_path = DEFAULT_CONFIG_PATH

    if not config_path.exists():
        return {}

    with open(config_path, encoding="utf-8") as f:
        data: dict[Any, Any] | None = yaml.safe_load(f)
        return data or {}


def _default_endpoints() -> dict[str, str]:
    return {
        "login": LOGIN_PATH,
        "register": REGISTER_PATH,
        "user_profile": USER_PROFILE_PATH,
        "echo": ECHO_PATH,
    }


@dataclass
class ClientSettings:
    """
    클라이언트 설정.

    Usage:
        settings = ClientSettings.from_config(load_config())
        exchange = HttpxExchange.from_settings(settings)
    """
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    stub_method: str = DEFAULT_STUB_METHOD
    endpoints: dict[str, str] = field(default_factory=_default_endpoints)

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "ClientSettings":
        section = config.get("client") or {}

        endpoints = _default_endpoints()
        endpoints.update(section.get("endpoints") or {})

        base_url = (
            os.environ.get(BASE_URL_ENV)
            or section.get("base_url")
            or DEFAULT_BASE_URL
        )

        return cls(
            base_url=str(base_url).rstrip("/"),
            timeout_seconds=float(section.get("timeout_seconds") or DEFAULT_TIMEOUT_SECONDS),
            stub_method=str(section.get("stub_method") or DEFAULT_STUB_METHOD),
            endpoints=endpoints,
        )

    def endpoint(self, name: str) -> str:
        """
        이름으로 endpoint 경로 조회.

        Raises:
            KeyError: 정의되지 않은 이름
        """
        return self.endpoints[name]

    def url(self, name: str) -> str:
        """base_url을 붙인 전체 URL."""
        return f"{self.base_url}{self.endpoint(name)}"
