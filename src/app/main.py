"""
개발용 서버 (FastAPI).

로컬 개발과 통합 테스트에서 fetch client의 상대편 역할:
- POST /auth/login: JSON 로그인
- GET /user/profile: Bearer 토큰 필요
- POST /rpc/echo: 바이너리 본문 에코 (application/x-protobuf)

실행:
- 개발: uv run uvicorn src.app.main:app --reload
"""

import hashlib
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Header, HTTPException, Request
from fastapi.responses import Response
from pydantic import BaseModel

from src.app.config import load_config
from src.domain.constants import (
    CONTENT_TYPE_PROTOBUF,
    ECHO_PATH,
    LOGIN_PATH,
    USER_PROFILE_PATH,
    StatusCodes,
)

logger = logging.getLogger(__name__)

# =============================================================================
# Schemas
# =============================================================================


class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(BaseModel):
    token: str


# =============================================================================
# Lifespan
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    애플리케이션 생명주기 관리.

    시작 시: 설정 로드
    """
    app.state.config = load_config()

    yield


# =============================================================================
# Helpers
# =============================================================================


def _get_config(request: Request) -> dict[str, Any]:
    # ASGI 테스트 전송은 lifespan을 실행하지 않음
    config = getattr(request.app.state, "config", None)
    if config is None:
        config = load_config()
        request.app.state.config = config
    return config


def _get_users(request: Request) -> dict[str, str]:
    server = _get_config(request).get("server") or {}
    return {
        str(user["username"]): str(user["password"])
        for user in server.get("users") or []
    }


def issue_token(username: str) -> str:
    """결정론적 개발용 토큰 (동일 사용자 → 동일 토큰)."""
    return f"dev-{hashlib.sha256(username.encode()).hexdigest()[:24]}"


# =============================================================================
# App Instance
# =============================================================================

app = FastAPI(
    title="Fetch Client Dev Server",
    description="fetch client 통합 확인용 로그인/에코 서버",
    version="0.1.0",
    lifespan=lifespan,
)


@app.get("/health")
async def health() -> dict[str, str]:
    """헬스 체크."""
    return {"status": "ok"}


@app.post(LOGIN_PATH, response_model=LoginResponse)
async def login(body: LoginRequest, request: Request) -> LoginResponse:
    """JSON 로그인."""
    users = _get_users(request)

    if users.get(body.username) != body.password:
        logger.info(f"Login rejected for {body.username!r}")
        raise HTTPException(
            status_code=StatusCodes.UNAUTHORIZED,
            detail="Invalid username or password",
        )

    return LoginResponse(token=issue_token(body.username))


@app.get(USER_PROFILE_PATH)
async def user_profile(
    request: Request,
    authorization: str | None = Header(default=None),
) -> dict[str, Any]:
    """토큰 소유자 프로필."""
    token = (authorization or "").removeprefix("Bearer ").strip()

    for username in _get_users(request):
        if token and token == issue_token(username):
            return {"username": username}

    raise HTTPException(
        status_code=StatusCodes.UNAUTHORIZED,
        detail="Missing or invalid token",
    )


@app.post(ECHO_PATH)
async def echo(request: Request) -> Response:
    """요청 본문을 그대로 돌려줌."""
    body = await request.body()
    return Response(content=body, media_type=CONTENT_TYPE_PROTOBUF)


# =============================================================================
# CLI Entry Point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    server = load_config().get("server") or {}
    uvicorn.run(
        "src.app.main:app",
        host=server.get("host", "127.0.0.1"),
        port=int(server.get("port", 8000)),
        reload=True,
    )
