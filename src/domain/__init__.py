"""Domain layer: errors, schemas and constants."""

from .errors import (
    DecodingError,
    EncodingError,
    ErrorCodes,
    FetchError,
    TransportError,
    TransportErrorKind,
)
from .schemas import (
    CycleLog,
    ResultState,
    TransportRequest,
    TransportResponse,
)

__all__ = [
    "FetchError",
    "EncodingError",
    "TransportError",
    "TransportErrorKind",
    "DecodingError",
    "ErrorCodes",
    "ResultState",
    "TransportRequest",
    "TransportResponse",
    "CycleLog",
]
