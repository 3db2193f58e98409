"""
Fetch Client 추상 인터페이스.

세 가지 전송 전략 (JSON / RPC stub / binary)이 공유하는 오케스트레이션:
    요청 구성 → 전송 호출 (정확히 1회) → 응답 분류 → 디코딩 → ResultState 발행

규칙:
- 경계 밖으로 예외를 던지지 않음 → 모든 실패는 ResultState.error
- 재시도/캐시/중복제거 없음: 호출마다 새 요청
- 인코딩 실패 시 전송 계층을 호출하지 않음
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Generic, Protocol, TypeVar, runtime_checkable

from src.core.logging import complete_cycle_log, create_cycle_log
from src.domain.constants import UNKNOWN_ERROR_MESSAGE
from src.domain.errors import EncodingError, ErrorCodes, FetchError
from src.domain.schemas import (
    CycleLog,
    ResultState,
    TransportRequest,
    TransportResponse,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


# =============================================================================
# Collaborator Interfaces
# =============================================================================

@runtime_checkable
class Exchange(Protocol):
    """요청/응답 교환. 연결 관리, 풀링은 구현체 책임."""

    async def send(self, request: TransportRequest) -> TransportResponse:
        ...


class Codec(ABC, Generic[T]):
    """
    encode/decode 전략.

    구현체는 구조적 동등성(==)을 가져야 함 (reactive trigger가 비교).
    """

    name: ClassVar[str] = "codec"

    @abstractmethod
    def encode(self, payload: Any) -> bytes | None:
        """
        payload → wire 형식.

        Returns:
            요청 본문 (본문이 없으면 None)

        Raises:
            EncodingError
        """
        ...

    @abstractmethod
    def decode(self, raw: Any) -> T:
        """
        wire 형식 → 결과 값.

        Raises:
            DecodingError
        """
        ...


# =============================================================================
# Error Helpers
# =============================================================================

def describe_error(error: Any) -> str:
    """
    실패 원인에서 사람용 메시지 추출.

    우선순위: message 키/속성 → details() (gRPC) → str(error)
    """
    if error is None:
        return UNKNOWN_ERROR_MESSAGE

    if isinstance(error, dict):
        message = error.get("message")
        if message:
            return str(message)

    message = getattr(error, "message", None)
    if isinstance(message, str) and message:
        return message

    details = getattr(error, "details", None)
    if callable(details):
        try:
            text = details()
        except Exception:
            text = None
        if text:
            return str(text)

    return str(error) or UNKNOWN_ERROR_MESSAGE


# =============================================================================
# Orchestration
# =============================================================================

class FetchClient(ABC):
    """
    Fetch Client 공통 오케스트레이션.

    하위 클래스는 _send()에서 전송만 담당하고,
    검증/인코딩/분류/디코딩/결과 발행은 여기서 처리.

    Usage:
        client = RestClient(HttpxExchange(base_url="https://api.example.com"))
        state = await client.invoke("/auth/login", {"username": "a"}, TextCodec("POST"))
    """

    # 이 클라이언트가 받는 codec 타입
    codec_type: ClassVar[type[Codec[Any]]] = Codec

    async def invoke(
        self,
        endpoint: str,
        payload: Any,
        codec: Codec[T],
    ) -> ResultState[T]:
        """
        한 번의 호출 사이클 실행.

        Args:
            endpoint: 호출 대상 (비어 있으면 에러)
            payload: 전송할 값 (codec이 해석)
            codec: encode/decode 전략

        Returns:
            성공: ResultState(data=decoded, error=None)
            실패: ResultState(data=None, error=message)
        """
        state, _ = await self.run_cycle(endpoint, payload, codec)
        return state

    async def run_cycle(
        self,
        endpoint: str,
        payload: Any,
        codec: Codec[T],
        token: int | None = None,
    ) -> tuple[ResultState[T], CycleLog]:
        """invoke()와 동일하되 CycleLog도 함께 반환."""
        cycle_log = create_cycle_log(
            endpoint,
            self._method_label(codec),
            getattr(codec, "name", type(codec).__name__),
            token,
        )

        try:
            self._check_request(endpoint, codec)
            body = codec.encode(payload)
            raw = await self._send(endpoint, body, codec)
            data = codec.decode(raw)
        except FetchError as e:
            complete_cycle_log(cycle_log, success=False, error=e)
            return ResultState.failed(e.message), cycle_log
        except Exception as e:
            # codec/전송 구현의 예상 밖 예외도 ResultState.error로 수렴
            logger.error(f"Unexpected failure in {endpoint} cycle: {e!r}", exc_info=True)
            error = FetchError(ErrorCodes.UNEXPECTED_ERROR, describe_error(e))
            complete_cycle_log(cycle_log, success=False, error=error)
            return ResultState.failed(error.message), cycle_log

        complete_cycle_log(cycle_log, success=True)
        return ResultState.ok(data), cycle_log

    def _check_request(self, endpoint: str, codec: Codec[Any]) -> None:
        if not isinstance(endpoint, str) or not endpoint.strip():
            raise EncodingError(
                ErrorCodes.INVALID_ENDPOINT,
                "endpoint가 비어 있습니다.",
                endpoint=endpoint,
            )
        if not isinstance(codec, self.codec_type):
            raise EncodingError(
                ErrorCodes.ENCODING_FAILED,
                f"{type(self).__name__}는 {self.codec_type.__name__}만 지원합니다 "
                f"(받은 codec: {type(codec).__name__}).",
            )

    def _method_label(self, codec: Codec[Any]) -> str:
        """로그용 메서드 이름."""
        return "-"

    @abstractmethod
    async def _send(self, endpoint: str, body: Any, codec: Codec[Any]) -> Any:
        """
        전송 계층 호출 (정확히 1회).

        Returns:
            codec.decode()에 넘길 원시 응답

        Raises:
            TransportError: 전송 실패 또는 비성공 상태
        """
        ...
