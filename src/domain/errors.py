"""
Error definitions for the fetch client.

규칙:
- 오케스트레이션 경계 밖으로 예외를 던지지 않음 → ResultState.error 문자열로 수렴
- 구분은 메시지 텍스트와 code로만 유지
- TransportError: REJECTED (원격이 비성공 응답) / UNKNOWN (그 외 모든 실패)
"""

from enum import Enum
from typing import Any


class FetchError(Exception):
    """
    Fetch 사이클 중 발생하는 에러의 기본 클래스.

    message는 ResultState.error로 그대로 노출되는 사람용 텍스트.

    Usage:
        raise EncodingError(ErrorCodes.ENCODING_FAILED, "...", codec="json")
    """

    def __init__(self, code: str, message: str, **context: Any) -> None:
        self.code = code
        self.message = message
        self.context = context
        super().__init__(f"[{code}] {message}")

    def to_dict(self) -> dict[str, Any]:
        """로그/JSON 직렬화용."""
        return {
            "code": self.code,
            "message": self.message,
            **self.context,
        }


class EncodingError(FetchError):
    """payload를 wire 형식으로 변환하지 못함."""
    pass


class TransportErrorKind(str, Enum):
    """전송 실패 분류."""
    REJECTED = "rejected"
    UNKNOWN = "unknown"


class TransportError(FetchError):
    """
    교환을 완료하지 못했거나 원격이 비성공 상태로 응답함.

    REJECTED: status_code / status_text 보유
    UNKNOWN: 실패 설명만 보유
    """

    def __init__(
        self,
        code: str,
        message: str,
        kind: TransportErrorKind = TransportErrorKind.UNKNOWN,
        **context: Any,
    ) -> None:
        self.kind = kind
        super().__init__(code, message, **context)

    @classmethod
    def rejected(cls, status_code: int, status_text: str) -> "TransportError":
        return cls(
            ErrorCodes.TRANSPORT_REJECTED,
            f"Error: {status_text}",
            kind=TransportErrorKind.REJECTED,
            status_code=status_code,
            status_text=status_text,
        )

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, **super().to_dict()}


class DecodingError(FetchError):
    """응답 바이트를 기대 타입으로 변환하지 못함."""
    pass


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """에러 코드 상수."""

    # === Request ===
    INVALID_ENDPOINT = "INVALID_ENDPOINT"
    INVALID_METHOD = "INVALID_METHOD"

    # === Codec ===
    ENCODING_FAILED = "ENCODING_FAILED"
    DECODING_FAILED = "DECODING_FAILED"

    # === Transport ===
    TRANSPORT_REJECTED = "TRANSPORT_REJECTED"
    TRANSPORT_FAILED = "TRANSPORT_FAILED"

    # === Stub ===
    STUB_METHOD_MISSING = "STUB_METHOD_MISSING"

    # === Other ===
    UNEXPECTED_ERROR = "UNEXPECTED_ERROR"
