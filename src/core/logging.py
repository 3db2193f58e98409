"""
Cycle logging: 호출 사이클 로그 스키마와 이벤트

규칙:
- 사이클 로그 필수 키: cycle_id, endpoint, method, codec, started_at, result
- 실패 시 error_code, error_message 기록
- 로그는 표준 logging으로도 남김 (logger = logging.getLogger(__name__))
"""

import logging
from datetime import UTC, datetime

from src.core.ids import generate_cycle_id
from src.domain.errors import FetchError
from src.domain.schemas import CycleLog

logger = logging.getLogger(__name__)

# =============================================================================
# Cycle Log Management
# =============================================================================


def create_cycle_log(
    endpoint: str,
    method: str,
    codec: str,
    token: int | None = None,
) -> CycleLog:
    """
    새 CycleLog 생성.

    Args:
        endpoint: 호출 대상
        method: HTTP 메서드 또는 stub 메서드명
        codec: codec 이름 (json, stub, protobuf)
        token: reactive trigger의 사이클 토큰

    Returns:
        초기화된 CycleLog
    """
    cycle_log = CycleLog(
        cycle_id=generate_cycle_id(token),
        endpoint=endpoint,
        method=method,
        codec=codec,
        started_at=datetime.now(UTC).isoformat(),
        result="pending",
    )
    logger.debug(
        f"Cycle {cycle_log.cycle_id} started: {codec} {method} {endpoint}"
    )
    return cycle_log


def complete_cycle_log(
    cycle_log: CycleLog,
    success: bool,
    error: FetchError | None = None,
) -> None:
    """
    CycleLog 완료 처리.

    Args:
        cycle_log: CycleLog 인스턴스
        success: 성공 여부
        error: 실패 원인 (실패 시)
    """
    now = datetime.now(UTC)
    cycle_log.finished_at = now.isoformat()
    started = datetime.fromisoformat(cycle_log.started_at)
    cycle_log.duration_ms = round((now - started).total_seconds() * 1000, 3)
    cycle_log.result = "success" if success else "failed"

    if success:
        logger.info(
            f"Cycle {cycle_log.cycle_id} succeeded "
            f"({cycle_log.method} {cycle_log.endpoint}, {cycle_log.duration_ms}ms)"
        )
        return

    if error is not None:
        cycle_log.error_code = error.code
        cycle_log.error_message = error.message

    logger.warning(
        f"Cycle {cycle_log.cycle_id} failed "
        f"({cycle_log.method} {cycle_log.endpoint}): "
        f"[{cycle_log.error_code}] {cycle_log.error_message}"
    )


def mark_stale(cycle_log: CycleLog) -> None:
    """
    새 사이클에 밀려난 CycleLog 표시.

    결과는 이미 기록된 상태여도 stale로 덮어씀 (구독자에게 전달되지 않음).
    """
    cycle_log.result = "stale"
    logger.debug(f"Cycle {cycle_log.cycle_id} superseded, result discarded")
