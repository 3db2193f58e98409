"""
RPC stub Fetch Client.

원격 프로시저 핸들이 marshaling을 담당하므로 codec은 identity.
오케스트레이션은 단일 콜백 완료를 awaitable로 감싸고 에러 인자를 분류함.

핸들 계약:
    handle(method_name, request, callback)
    callback(error, response): 정확히 1회 호출

gRPC Python 스타일 stub (getattr(stub, method).future(request))은
FutureHandle로 같은 계약에 맞춤.
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, ClassVar

from src.domain.constants import DEFAULT_STUB_METHOD
from src.domain.errors import (
    ErrorCodes,
    FetchError,
    TransportError,
    TransportErrorKind,
)

from .base import Codec, FetchClient, describe_error

logger = logging.getLogger(__name__)

StubCallback = Callable[[Any, Any], None]
CallbackHandle = Callable[[str, Any, StubCallback], None]


@dataclass(frozen=True)
class StubCodec(Codec[Any]):
    """payload/응답을 그대로 통과시키는 codec."""

    name: ClassVar[str] = "stub"

    def encode(self, payload: Any) -> Any:
        return payload

    def decode(self, raw: Any) -> Any:
        return raw


class FutureHandle:
    """
    future 기반 stub → 콜백 계약 어댑터.

    Usage:
        handle = FutureHandle(service_stub)
        client = RpcStubClient(handle)
    """

    def __init__(self, stub: Any):
        self.stub = stub

    def __call__(self, method_name: str, request: Any, callback: StubCallback) -> None:
        method = getattr(self.stub, method_name, None)
        future_call = getattr(method, "future", None)
        if not callable(future_call):
            raise TransportError(
                ErrorCodes.STUB_METHOD_MISSING,
                f"stub에 {method_name} 메서드가 없습니다.",
                stub=type(self.stub).__name__,
            )

        future = future_call(request)
        future.add_done_callback(lambda done: _complete_from_future(done, callback))


def _complete_from_future(future: Any, callback: StubCallback) -> None:
    try:
        error = future.exception()
    except Exception as e:
        # 취소된 future는 exception()에서 CancelledError를 던짐
        callback(e, None)
        return

    if error is not None:
        callback(error, None)
    else:
        callback(None, future.result())


class RpcStubClient(FetchClient):
    """
    RPC stub 클라이언트.

    endpoint는 핸들이 이미 바인딩된 주소이므로 검증/로그에만 사용.

    Usage:
        client = RpcStubClient(handle, method_name="GetYourData")
        state = await client.invoke("localhost:50051", request, StubCodec())
    """

    codec_type = StubCodec

    def __init__(
        self,
        handle: CallbackHandle | Any,
        method_name: str = DEFAULT_STUB_METHOD,
    ):
        """
        Args:
            handle: 콜백 핸들 또는 future 기반 stub 객체
            method_name: 호출할 메서드명 (관례로 고정)
        """
        self.handle: CallbackHandle = handle if callable(handle) else FutureHandle(handle)
        self.method_name = method_name

    def _method_label(self, codec: Codec[Any]) -> str:
        return self.method_name

    async def _send(self, endpoint: str, body: Any, codec: Codec[Any]) -> Any:
        loop = asyncio.get_running_loop()
        future: asyncio.Future[Any] = loop.create_future()

        def resolve(error: Any, response: Any) -> None:
            if future.done():
                logger.warning(
                    f"{self.method_name} callback invoked more than once; ignored"
                )
                return
            if error is not None:
                future.set_exception(_classify(error, endpoint))
            else:
                future.set_result(response)

        def callback(error: Any, response: Any) -> None:
            # 콜백은 다른 스레드에서 올 수 있음
            loop.call_soon_threadsafe(resolve, error, response)

        try:
            self.handle(self.method_name, body, callback)
        except FetchError:
            raise
        except Exception as e:
            logger.error(f"{self.method_name} call failed: {e!r}", exc_info=True)
            raise TransportError(
                ErrorCodes.TRANSPORT_FAILED,
                describe_error(e),
                kind=TransportErrorKind.UNKNOWN,
                endpoint=endpoint,
            ) from e

        return await future


def _classify(error: Any, endpoint: str) -> TransportError:
    """
    콜백 에러 인자 분류.

    gRPC 상태 에러(code() 보유) → REJECTED, 그 외 → UNKNOWN
    """
    message = describe_error(error)
    status = getattr(error, "code", None)
    if callable(status):
        try:
            code = status()
        except Exception:
            code = None
        if code is not None:
            return TransportError(
                ErrorCodes.TRANSPORT_REJECTED,
                message,
                kind=TransportErrorKind.REJECTED,
                endpoint=endpoint,
                status=str(code),
            )

    return TransportError(
        ErrorCodes.TRANSPORT_FAILED,
        message,
        kind=TransportErrorKind.UNKNOWN,
        endpoint=endpoint,
    )
