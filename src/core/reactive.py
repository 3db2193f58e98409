"""
Reactive trigger: 파라미터가 바뀔 때마다 fetch 사이클 재실행.

규칙:
- (endpoint, payload, codec)을 구조적 동등성(==)으로 이전 사이클과 비교
- 다르면 새 pending ResultState 발행 후 사이클 1회 실행, 같으면 아무것도 안 함
- 사이클마다 단조 증가 토큰 부여, 완료 시 토큰이 최신이 아니면 결과 폐기 (stale)
- 요청 취소 없음: 밀려난 사이클도 전송은 끝까지 진행
"""

import asyncio
import copy
import logging
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from src.app.clients.base import Codec, FetchClient
from src.core.logging import mark_stale
from src.domain.schemas import CycleLog, ResultState

logger = logging.getLogger(__name__)

T = TypeVar("T")

Subscriber = Callable[[ResultState[Any]], None]

_UNSET: Any = object()


class ReactiveFetch(Generic[T]):
    """
    파라미터 구독형 fetch.

    Usage:
        fetch = ReactiveFetch(RestClient(exchange))
        fetch.subscribe(lambda state: print(state.data, state.error))
        fetch.update("/auth/login", {"username": "a", "password": "b"}, TextCodec("POST"))
        state = await fetch.wait()
    """

    def __init__(self, client: FetchClient):
        self.client = client
        self.last_cycle_log: CycleLog | None = None
        self._params: Any = _UNSET
        self._state: ResultState[T] = ResultState.pending()
        self._token = 0
        self._subscribers: list[Subscriber] = []
        self._current: asyncio.Task[None] | None = None
        self._tasks: set[asyncio.Task[None]] = set()

    @property
    def state(self) -> ResultState[T]:
        """마지막으로 발행된 ResultState."""
        return self._state

    @property
    def token(self) -> int:
        """현재 사이클 토큰 (사이클 시작마다 1씩 증가)."""
        return self._token

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        ResultState 발행 구독.

        Returns:
            구독 해제 함수
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def update(self, endpoint: str, payload: Any, codec: Codec[T]) -> bool:
        """
        파라미터 갱신.

        Returns:
            새 사이클을 시작했으면 True
        """
        if self._params is not _UNSET and self._params == (endpoint, payload, codec):
            return False

        # 호출자가 payload를 제자리 수정해도 이전 입력과 비교되도록 스냅샷 보관
        self._params = (endpoint, _snapshot(payload), codec)
        self._start_cycle()
        return True

    def refresh(self) -> None:
        """
        같은 파라미터로 새 사이클 강제 실행.

        Raises:
            RuntimeError: update()가 한 번도 호출되지 않음
        """
        if self._params is _UNSET:
            msg = "refresh() called before update()"
            raise RuntimeError(msg)
        self._start_cycle()

    async def wait(self) -> ResultState[T]:
        """
        최신 사이클 완료까지 대기 후 상태 반환.

        대기 중 update()/refresh()로 새 사이클이 시작되면 그 사이클까지 대기.
        """
        while self._current is not None:
            current = self._current
            await current
            if self._current is current:
                break
        return self._state

    async def close(self) -> None:
        """진행 중인 모든 사이클 완료 대기, 구독 해제."""
        if self._tasks:
            await asyncio.gather(*self._tasks)
        self._subscribers.clear()

    def _start_cycle(self) -> None:
        self._token += 1
        token = self._token
        endpoint, payload, codec = self._params

        self._publish(ResultState.pending())

        task = asyncio.get_running_loop().create_task(
            self._run(token, endpoint, payload, codec)
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        self._current = task

    async def _run(
        self,
        token: int,
        endpoint: str,
        payload: Any,
        codec: Codec[T],
    ) -> None:
        state, cycle_log = await self.client.run_cycle(
            endpoint, payload, codec, token=token
        )

        if token != self._token:
            mark_stale(cycle_log)
            return

        self.last_cycle_log = cycle_log
        self._publish(state)

    def _publish(self, state: ResultState[T]) -> None:
        self._state = state
        for callback in list(self._subscribers):
            try:
                callback(state)
            except Exception:
                logger.exception("ResultState subscriber failed")


def _snapshot(payload: Any) -> Any:
    try:
        return copy.deepcopy(payload)
    except Exception:
        # 복사 불가 객체 (lock, 소켓 등)는 참조로 비교
        logger.debug(f"{type(payload).__name__} payload is not deep-copyable; keeping reference")
        return payload
