"""
JSON (plain-text) Fetch Client.

- 메서드: GET / POST / PUT / DELETE (그 외는 전송 전 에러)
- GET은 본문 없음, 그 외는 payload를 JSON 텍스트로 전송
- Content-Type: application/json
"""

import json
from dataclasses import dataclass
from typing import Any, ClassVar

from src.domain.constants import (
    CONTENT_TYPE_JSON,
    JSON_METHODS,
    METHOD_GET,
)
from src.domain.errors import DecodingError, EncodingError, ErrorCodes

from .base import Codec
from .http import HttpFetchClient


@dataclass(frozen=True)
class TextCodec(Codec[Any]):
    """
    JSON 텍스트 codec.

    Usage:
        codec = TextCodec("POST")
        body = codec.encode({"username": "a", "password": "b"})
    """

    method: str = METHOD_GET

    name: ClassVar[str] = "json"

    def __post_init__(self) -> None:
        object.__setattr__(self, "method", str(self.method).upper())

    def encode(self, payload: Any) -> bytes | None:
        if self.method not in JSON_METHODS:
            raise EncodingError(
                ErrorCodes.INVALID_METHOD,
                f"지원하지 않는 HTTP 메서드입니다: {self.method}",
                method=self.method,
            )

        # 조회 요청은 본문 없음
        if self.method == METHOD_GET:
            return None

        try:
            return json.dumps(payload, ensure_ascii=False).encode("utf-8")
        except (TypeError, ValueError, RecursionError) as e:
            raise EncodingError(
                ErrorCodes.ENCODING_FAILED,
                f"요청 데이터를 JSON으로 변환할 수 없습니다: {e}",
                codec=self.name,
            ) from e

    def decode(self, raw: Any) -> Any:
        if raw is None or len(raw) == 0:
            return None

        try:
            return json.loads(raw)
        except (ValueError, TypeError, RecursionError) as e:
            raise DecodingError(
                ErrorCodes.DECODING_FAILED,
                f"응답을 JSON으로 해석할 수 없습니다: {e}",
                codec=self.name,
            ) from e


class RestClient(HttpFetchClient):
    """
    JSON 요청/응답 클라이언트.

    Usage:
        client = RestClient(HttpxExchange(base_url="https://api.example.com"))
        state = await client.invoke(
            "/auth/login",
            {"username": "a", "password": "b"},
            TextCodec("POST"),
        )
    """

    codec_type = TextCodec
    content_type = CONTENT_TYPE_JSON

    def _method_label(self, codec: Codec[Any]) -> str:
        return getattr(codec, "method", METHOD_GET)
