"""
Binary (protobuf) Fetch Client.

- 항상 POST, Content-Type: application/x-protobuf
- 요청: payload.SerializeToString()
- 응답: response_type.FromString(raw bytes), 바이트는 변형 없이 전달

protobuf 메시지 API와 같은 이름의 capability만 요구 (duck typing).
"""

from dataclasses import dataclass
from typing import Any, ClassVar, Generic, Protocol, TypeVar, runtime_checkable

from src.domain.constants import BINARY_METHOD, CONTENT_TYPE_PROTOBUF
from src.domain.errors import DecodingError, EncodingError, ErrorCodes

from .base import Codec
from .http import HttpFetchClient

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class BinarySerializable(Protocol):
    """자기 자신을 바이너리로 직렬화할 수 있는 payload."""

    def SerializeToString(self) -> bytes:
        ...


@runtime_checkable
class BinaryParsable(Protocol[T_co]):
    """바이너리에서 값을 복원할 수 있는 응답 타입."""

    def FromString(self, data: bytes) -> T_co:
        ...


@dataclass(frozen=True)
class BinaryCodec(Codec[T], Generic[T]):
    """
    바이너리 codec.

    response_type은 호출자가 지정 (예: 생성된 protobuf 메시지 클래스).

    Usage:
        codec = BinaryCodec(LoginResponse)
    """

    response_type: Any

    name: ClassVar[str] = "protobuf"

    def encode(self, payload: Any) -> bytes:
        serialize = getattr(payload, "SerializeToString", None)
        if not callable(serialize):
            # 호출자 프로그래밍 오류
            raise EncodingError(
                ErrorCodes.ENCODING_FAILED,
                f"{type(payload).__name__} 객체는 바이너리 직렬화를 지원하지 않습니다 "
                f"(SerializeToString 없음).",
                codec=self.name,
            )

        try:
            data = serialize()
        except Exception as e:
            raise EncodingError(
                ErrorCodes.ENCODING_FAILED,
                f"요청 데이터를 바이너리로 직렬화할 수 없습니다: {e}",
                codec=self.name,
            ) from e

        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise EncodingError(
                ErrorCodes.ENCODING_FAILED,
                f"SerializeToString()이 bytes가 아닌 {type(data).__name__}을(를) 반환했습니다.",
                codec=self.name,
            )
        return bytes(data)

    def decode(self, raw: Any) -> T:
        parse = getattr(self.response_type, "FromString", None)
        if not callable(parse):
            raise DecodingError(
                ErrorCodes.DECODING_FAILED,
                f"{_type_name(self.response_type)} 타입은 바이너리 역직렬화를 지원하지 않습니다 "
                f"(FromString 없음).",
                codec=self.name,
            )

        try:
            result: T = parse(raw)
        except Exception as e:
            raise DecodingError(
                ErrorCodes.DECODING_FAILED,
                f"응답을 {_type_name(self.response_type)}(으)로 역직렬화할 수 없습니다: {e}",
                codec=self.name,
            ) from e
        return result


class ProtoClient(HttpFetchClient):
    """
    바이너리 요청/응답 클라이언트.

    Usage:
        client = ProtoClient(HttpxExchange(base_url="https://api.example.com"))
        state = await client.invoke("/auth/login", request_msg, BinaryCodec(LoginResponse))
    """

    codec_type = BinaryCodec
    content_type = CONTENT_TYPE_PROTOBUF

    def _method_label(self, codec: Codec[Any]) -> str:
        return BINARY_METHOD


def _type_name(value: Any) -> str:
    return getattr(value, "__name__", type(value).__name__)


class RawMessage:
    """
    불투명 바이트를 그대로 담는 메시지.

    스키마 없이 바이너리 경로를 확인할 때 사용 (예: 에코 엔드포인트).
    """

    def __init__(self, data: bytes = b""):
        self.data = bytes(data)

    def SerializeToString(self) -> bytes:
        return self.data

    @classmethod
    def FromString(cls, data: bytes) -> "RawMessage":
        return cls(data)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, RawMessage) and other.data == self.data

    def __hash__(self) -> int:
        return hash(self.data)

    def __repr__(self) -> str:
        return f"RawMessage({self.data!r})"
