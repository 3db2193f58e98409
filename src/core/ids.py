"""
ID 생성: cycle_id

규칙:
- 사이클마다 새 cycle_id 발급
- 동일 파라미터 재호출도 새 ID (캐시/중복제거 없음)
"""

import uuid
from datetime import UTC, datetime


def generate_cycle_id(token: int | None = None) -> str:
    """
    Cycle ID 생성.

    고유성 보장: UUID v4
    포맷: CYC-{timestamp}-{uuid[:8]} (token 지정 시 CYC-{timestamp}-{token}-{uuid[:8]})

    Args:
        token: reactive trigger의 사이클 토큰 (선택)

    Returns:
        cycle_id 문자열
    """
    now = datetime.now(UTC)
    timestamp = now.strftime("%Y%m%d%H%M%S")
    unique = uuid.uuid4().hex[:8]

    if token is None:
        return f"CYC-{timestamp}-{unique}"
    return f"CYC-{timestamp}-{token}-{unique}"
