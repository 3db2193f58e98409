"""
Constants for the fetch client.

규칙:
- content marker는 codec별로 고정 (json / protobuf)
- stub 메서드명은 관례로 고정, config에서만 변경
"""

# =============================================================================
# Content Markers
# =============================================================================

CONTENT_TYPE_JSON = "application/json"
CONTENT_TYPE_PROTOBUF = "application/x-protobuf"

# =============================================================================
# HTTP Methods
# =============================================================================

METHOD_GET = "GET"
METHOD_POST = "POST"
METHOD_PUT = "PUT"
METHOD_DELETE = "DELETE"

# JSON 클라이언트가 허용하는 메서드
JSON_METHODS: frozenset[str] = frozenset({
    METHOD_GET,
    METHOD_POST,
    METHOD_PUT,
    METHOD_DELETE,
})

# 바이너리 클라이언트는 항상 POST
BINARY_METHOD = METHOD_POST

# =============================================================================
# RPC Stub
# =============================================================================

# stub 호출 메서드명 (관례)
DEFAULT_STUB_METHOD = "GetYourData"

# =============================================================================
# Status Codes
# =============================================================================


class StatusCodes:
    """HTTP 상태 코드 상수."""

    OK = 200
    CREATED = 201
    ACCEPTED = 202
    NO_CONTENT = 204
    BAD_REQUEST = 400
    UNAUTHORIZED = 401
    FORBIDDEN = 403
    NOT_FOUND = 404
    INTERNAL_SERVER_ERROR = 500
    NOT_IMPLEMENTED = 501
    BAD_GATEWAY = 502
    SERVICE_UNAVAILABLE = 503
    GATEWAY_TIMEOUT = 504


def is_success_status(status_code: int) -> bool:
    """2xx 여부."""
    return 200 <= status_code < 300


# =============================================================================
# Endpoints / Client Defaults
# =============================================================================

DEFAULT_BASE_URL = "https://api.example.com"

LOGIN_PATH = "/auth/login"
REGISTER_PATH = "/auth/register"
USER_PROFILE_PATH = "/user/profile"
ECHO_PATH = "/rpc/echo"

# 요청 타임아웃 (초)
DEFAULT_TIMEOUT_SECONDS = 5.0

# 원인 불명 에러 메시지
UNKNOWN_ERROR_MESSAGE = "알 수 없는 오류가 발생했습니다"
