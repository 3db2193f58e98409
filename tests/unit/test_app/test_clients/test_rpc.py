"""
test_rpc.py - RPC stub 클라이언트 테스트

검증:
- 콜백 (error, response) → ResultState
- 콜백 중복 호출 → 첫 결과만 반영
- 다른 스레드의 콜백도 안전하게 반영
- future 기반 stub (FutureHandle)
"""

import threading
from concurrent.futures import Future
from unittest.mock import MagicMock

import pytest

from src.app.clients.rpc import FutureHandle, RpcStubClient, StubCodec
from src.domain.constants import DEFAULT_STUB_METHOD
from src.domain.errors import ErrorCodes, TransportError

# =============================================================================
# Handle Factories
# =============================================================================


def make_handle(error=None, response=None):
    """동기적으로 콜백을 1회 호출하는 핸들."""
    calls = []

    def handle(method_name, request, callback):
        calls.append((method_name, request))
        callback(error, response)

    handle.calls = calls
    return handle


class FakeStub:
    """future 기반 stub (gRPC Python 스타일)."""

    def __init__(self, future: Future):
        self.GetYourData = MagicMock()
        self.GetYourData.future.return_value = future


# =============================================================================
# StubCodec 테스트
# =============================================================================


class TestStubCodec:
    """StubCodec 테스트."""

    def test_identity(self):
        codec = StubCodec()
        payload = {"id": 1}

        assert codec.encode(payload) is payload
        assert codec.decode(payload) is payload

    def test_equality(self):
        assert StubCodec() == StubCodec()


# =============================================================================
# RpcStubClient 테스트
# =============================================================================


class TestRpcStubClient:
    """RpcStubClient 테스트."""

    @pytest.mark.asyncio
    async def test_success(self):
        handle = make_handle(response={"token": "xyz"})
        client = RpcStubClient(handle)

        state = await client.invoke("localhost:50051", {"id": 1}, StubCodec())

        assert state.data == {"token": "xyz"}
        assert state.error is None
        assert handle.calls == [(DEFAULT_STUB_METHOD, {"id": 1})]

    @pytest.mark.asyncio
    async def test_failure_message(self):
        """error={message: "unavailable"} → "unavailable"."""
        handle = make_handle(error={"message": "unavailable"})
        client = RpcStubClient(handle)

        state = await client.invoke("localhost:50051", {}, StubCodec())

        assert state.data is None
        assert state.error == "unavailable"

    @pytest.mark.asyncio
    async def test_custom_method_name(self):
        handle = make_handle(response=1)
        client = RpcStubClient(handle, method_name="Login")

        await client.invoke("localhost:50051", {}, StubCodec())

        assert handle.calls[0][0] == "Login"

    @pytest.mark.asyncio
    async def test_first_resolution_wins(self):
        """콜백 2회 호출 → 첫 결과만."""

        def handle(method_name, request, callback):
            callback(None, "first")
            callback({"message": "late error"}, None)

        client = RpcStubClient(handle)

        state = await client.invoke("localhost:50051", {}, StubCodec())

        assert state.data == "first"
        assert state.error is None

    @pytest.mark.asyncio
    async def test_callback_from_other_thread(self):
        def handle(method_name, request, callback):
            threading.Thread(target=callback, args=(None, "threaded")).start()

        client = RpcStubClient(handle)

        state = await client.invoke("localhost:50051", {}, StubCodec())

        assert state.data == "threaded"

    @pytest.mark.asyncio
    async def test_handle_raises(self):
        """핸들 호출 자체의 예외 → error."""

        def handle(method_name, request, callback):
            raise RuntimeError("channel closed")

        client = RpcStubClient(handle)

        state = await client.invoke("localhost:50051", {}, StubCodec())

        assert state.data is None
        assert state.error == "channel closed"

    @pytest.mark.asyncio
    async def test_grpc_status_error(self):
        """code()/details()를 가진 에러 → details 메시지."""

        class RpcError(Exception):
            def code(self):
                return "StatusCode.UNAVAILABLE"

            def details(self):
                return "failed to connect to all addresses"

        client = RpcStubClient(make_handle(error=RpcError()))

        state, cycle_log = await client.run_cycle("localhost:50051", {}, StubCodec())

        assert state.error == "failed to connect to all addresses"
        assert cycle_log.error_code == ErrorCodes.TRANSPORT_REJECTED


# =============================================================================
# FutureHandle 테스트
# =============================================================================


class TestFutureHandle:
    """FutureHandle 테스트."""

    @pytest.mark.asyncio
    async def test_non_callable_stub_wrapped(self):
        future: Future = Future()
        future.set_result({"token": "xyz"})
        stub = FakeStub(future)

        client = RpcStubClient(stub)
        state = await client.invoke("localhost:50051", {"id": 1}, StubCodec())

        assert isinstance(client.handle, FutureHandle)
        assert state.data == {"token": "xyz"}
        stub.GetYourData.future.assert_called_once_with({"id": 1})

    @pytest.mark.asyncio
    async def test_future_exception(self):
        future: Future = Future()
        future.set_exception(RuntimeError("unavailable"))

        client = RpcStubClient(FakeStub(future))
        state = await client.invoke("localhost:50051", {}, StubCodec())

        assert state.data is None
        assert state.error == "unavailable"

    @pytest.mark.asyncio
    async def test_future_resolved_later(self):
        future: Future = Future()
        client = RpcStubClient(FakeStub(future))

        threading.Timer(0.01, future.set_result, args=("later",)).start()
        state = await client.invoke("localhost:50051", {}, StubCodec())

        assert state.data == "later"

    def test_missing_method(self):
        handle = FutureHandle(object())

        with pytest.raises(TransportError) as exc_info:
            handle("GetYourData", {}, lambda error, response: None)

        assert exc_info.value.code == ErrorCodes.STUB_METHOD_MISSING

    @pytest.mark.asyncio
    async def test_missing_method_reported(self):
        client = RpcStubClient(object())

        state = await client.invoke("localhost:50051", {}, StubCodec())

        assert "GetYourData" in state.error
