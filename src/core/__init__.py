"""
Core layer: 사이클 ID, 사이클 로그, reactive trigger.

reactive는 app.clients에 의존하므로 여기서 re-export하지 않음:
    from src.core.reactive import ReactiveFetch
"""

from .ids import generate_cycle_id
from .logging import complete_cycle_log, create_cycle_log, mark_stale

__all__ = [
    # ids
    "generate_cycle_id",
    # logging
    "create_cycle_log",
    "complete_cycle_log",
    "mark_stale",
]
