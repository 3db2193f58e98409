#!/usr/bin/env python
"""
API 연결 확인 스크립트.

default.yaml (또는 FETCH_BASE_URL)의 서버에 대해
JSON 로그인과 바이너리 에코를 한 번씩 호출.

실행:
    uv run python scripts/check_connection.py
    uv run python scripts/check_connection.py --username a --password b
"""

import argparse
import asyncio
import sys
from pathlib import Path

# 프로젝트 루트를 path에 추가
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv  # noqa: E402

from src.app.clients import (  # noqa: E402
    BinaryCodec,
    Exchange,
    HttpxExchange,
    ProtoClient,
    RawMessage,
    RestClient,
    TextCodec,
)
from src.app.config import ClientSettings, load_config  # noqa: E402


async def check_login(
    exchange: Exchange,
    settings: ClientSettings,
    username: str,
    password: str,
) -> bool:
    """JSON 로그인 확인."""
    print("\n" + "=" * 60)
    print("🧪 JSON 로그인")
    print("=" * 60)

    client = RestClient(exchange)
    state = await client.invoke(
        settings.endpoint("login"),
        {"username": username, "password": password},
        TextCodec("POST"),
    )

    if state.error is not None:
        print(f"❌ 실패: {state.error}")
        return False

    print(f"📥 응답: {state.data}")
    print("✅ 로그인 성공!")
    return True


async def check_echo(exchange: Exchange, settings: ClientSettings) -> bool:
    """바이너리 에코 확인."""
    print("\n" + "=" * 60)
    print("🧪 바이너리 에코")
    print("=" * 60)

    sent = RawMessage(b"\x08\x96\x01")
    client = ProtoClient(exchange)
    state = await client.invoke(settings.endpoint("echo"), sent, BinaryCodec(RawMessage))

    if state.error is not None:
        print(f"❌ 실패: {state.error}")
        return False

    if state.data != sent:
        print(f"❌ 응답 불일치: {state.data!r}")
        return False

    print("✅ 에코 일치!")
    return True


async def run_checks(
    exchange: Exchange,
    settings: ClientSettings,
    username: str,
    password: str,
) -> dict[str, bool]:
    return {
        "login": await check_login(exchange, settings, username, password),
        "echo": await check_echo(exchange, settings),
    }


async def main(argv: list[str] | None = None) -> int:
    """메인 확인 실행."""
    parser = argparse.ArgumentParser(description="API 연결 확인")
    parser.add_argument("--username", default="a")
    parser.add_argument("--password", default="b")
    args = parser.parse_args(argv)

    # .env 파일 로드 (FETCH_BASE_URL 등)
    load_dotenv()

    settings = ClientSettings.from_config(load_config())
    print(f"🚀 연결 확인 시작: {settings.base_url}")

    async with HttpxExchange.from_settings(settings) as exchange:
        results = await run_checks(exchange, settings, args.username, args.password)

    # 결과 요약
    print("\n" + "=" * 60)
    print("📊 결과 요약")
    print("=" * 60)

    all_passed = True
    for name, passed in results.items():
        status = "✅ PASS" if passed else "❌ FAIL"
        print(f"  {name}: {status}")
        if not passed:
            all_passed = False

    return 0 if all_passed else 1


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
