"""
Fetch Client Abstraction.

전송 전략 교체 가능하게 설계 (JSON / RPC stub / binary).
"""

from .base import Codec, Exchange, FetchClient, describe_error
from .http import HttpFetchClient, HttpxExchange
from .proto import BinaryCodec, ProtoClient, RawMessage
from .rest import RestClient, TextCodec
from .rpc import FutureHandle, RpcStubClient, StubCodec

__all__ = [
    "Codec",
    "Exchange",
    "FetchClient",
    "describe_error",
    "HttpFetchClient",
    "HttpxExchange",
    "TextCodec",
    "RestClient",
    "StubCodec",
    "RpcStubClient",
    "FutureHandle",
    "BinaryCodec",
    "ProtoClient",
    "RawMessage",
]
