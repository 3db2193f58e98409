"""
Data schemas for the fetch client.

규칙:
- ResultState: data / error 중 최대 하나만 값을 가짐 (생산자가 보장)
- 둘 다 None이면 pending (요청 중 또는 최초 호출 전)
- 사이클마다 새 인스턴스 생성, 공유/재사용 금지
"""

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")

# =============================================================================
# Result State
# =============================================================================

@dataclass
class ResultState(Generic[T]):
    """
    호출 사이클의 결과 컨테이너.

    Usage:
        state = ResultState.ok({"token": "xyz"})
        state = ResultState.failed("Error: Unauthorized")
    """
    data: T | None = None
    error: str | None = None

    @classmethod
    def pending(cls) -> "ResultState[T]":
        return cls()

    @classmethod
    def ok(cls, data: T) -> "ResultState[T]":
        return cls(data=data, error=None)

    @classmethod
    def failed(cls, message: str) -> "ResultState[T]":
        return cls(data=None, error=message)

    @property
    def is_pending(self) -> bool:
        return self.data is None and self.error is None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @property
    def is_success(self) -> bool:
        # data가 None으로 디코딩되는 성공(빈 본문)은 pending과 구분 불가
        return self.error is None and self.data is not None

    def to_dict(self) -> dict[str, Any]:
        return {"data": self.data, "error": self.error}


# =============================================================================
# Transport Schemas
# =============================================================================

@dataclass(frozen=True)
class TransportRequest:
    """교환 계층으로 전달되는 요청."""
    endpoint: str
    method: str
    headers: dict[str, str] = field(default_factory=dict)
    body: bytes | None = None


@dataclass(frozen=True)
class TransportResponse:
    """교환 계층이 돌려주는 응답."""
    ok: bool
    status_code: int
    status_text: str = ""
    body: bytes = b""


# =============================================================================
# Cycle Log
# =============================================================================

@dataclass
class CycleLog:
    """
    호출 사이클 로그.

    result: pending | success | failed | stale
    """
    cycle_id: str
    endpoint: str
    method: str
    codec: str
    started_at: str
    finished_at: str | None = None
    result: str = "pending"
    error_code: str | None = None
    error_message: str | None = None
    duration_ms: float | None = None

    def to_dict(self) -> dict[str, Any]:
        """JSON 직렬화용."""
        return {
            "cycle_id": self.cycle_id,
            "endpoint": self.endpoint,
            "method": self.method,
            "codec": self.codec,
            "started_at": self.started_at,
            "finished_at": self.finished_at,
            "result": self.result,
            "error_code": self.error_code,
            "error_message": self.error_message,
            "duration_ms": self.duration_ms,
        }
