"""
HTTP 교환 계층 (httpx).

- HttpxExchange: httpx.AsyncClient 위의 얇은 Exchange 구현
- HttpFetchClient: JSON/binary 클라이언트의 공통 전송 로직 (상태 분류 포함)

타임아웃은 httpx에 그대로 위임 (초과 시 UNKNOWN 에러로 보고).
"""

import logging
from typing import Any, ClassVar

import httpx

from src.domain.constants import DEFAULT_TIMEOUT_SECONDS, is_success_status
from src.domain.errors import ErrorCodes, TransportError, TransportErrorKind
from src.domain.schemas import TransportRequest, TransportResponse

from .base import Codec, Exchange, FetchClient, describe_error

logger = logging.getLogger(__name__)


class HttpxExchange:
    """
    httpx 기반 Exchange.

    client를 주입하면 그대로 사용 (종료 책임은 호출자),
    없으면 첫 요청 시 생성하고 aclose()에서 닫음.

    Usage:
        async with HttpxExchange(base_url="https://api.example.com") as exchange:
            client = RestClient(exchange)
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        client: httpx.AsyncClient | None = None,
    ):
        self.base_url = base_url or ""
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    @classmethod
    def from_settings(cls, settings: Any) -> "HttpxExchange":
        """ClientSettings에서 생성."""
        return cls(base_url=settings.base_url, timeout=settings.timeout_seconds)

    def _get_client(self) -> httpx.AsyncClient:
        """httpx 클라이언트 (lazy init)."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
            )
        return self._client

    async def send(self, request: TransportRequest) -> TransportResponse:
        client = self._get_client()
        response = await client.request(
            request.method,
            request.endpoint,
            headers=request.headers,
            content=request.body,
        )
        return TransportResponse(
            ok=is_success_status(response.status_code),
            status_code=response.status_code,
            status_text=response.reason_phrase,
            body=response.content,
        )

    async def aclose(self) -> None:
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HttpxExchange":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()


class HttpFetchClient(FetchClient):
    """
    요청/응답 교환 위의 FetchClient.

    하위 클래스는 content_type과 _method_label()만 정의.
    """

    content_type: ClassVar[str] = "application/octet-stream"

    def __init__(
        self,
        exchange: Exchange,
        headers: dict[str, str] | None = None,
    ):
        """
        Args:
            exchange: 요청/응답 교환 구현체
            headers: 모든 요청에 추가할 헤더 (예: Authorization)
        """
        self.exchange = exchange
        self.headers = dict(headers or {})

    def _build_request(
        self,
        endpoint: str,
        body: bytes | None,
        codec: Codec[Any],
    ) -> TransportRequest:
        headers = {
            **self.headers,
            "Content-Type": self.content_type,
            "Accept": self.content_type,
        }
        return TransportRequest(
            endpoint=endpoint,
            method=self._method_label(codec),
            headers=headers,
            body=body,
        )

    async def _send(
        self,
        endpoint: str,
        body: Any,
        codec: Codec[Any],
    ) -> bytes:
        request = self._build_request(endpoint, body, codec)

        try:
            response = await self.exchange.send(request)
        except Exception as e:
            logger.error(
                f"{request.method} {endpoint} failed: {e!r}", exc_info=True
            )
            raise TransportError(
                ErrorCodes.TRANSPORT_FAILED,
                describe_error(e),
                kind=TransportErrorKind.UNKNOWN,
                endpoint=endpoint,
            ) from e

        if not response.ok:
            raise TransportError.rejected(
                response.status_code,
                _status_text(response),
            )

        return response.body


def _status_text(response: TransportResponse) -> str:
    """statusText 결정: 응답 값 → 표준 reason phrase → 숫자 코드."""
    if response.status_text:
        return response.status_text
    phrase = httpx.codes.get_reason_phrase(response.status_code)
    return phrase or str(response.status_code)
