"""JSON-RPC related objects for querying the client under test."""

from .rpc import BaseRPC, BlockNumberType, EthRPC
from .types import JSONRPCError, RPCBlock, RPCReplyError

__all__ = ["BaseRPC", "BlockNumberType", "EthRPC", "JSONRPCError", "RPCBlock", "RPCReplyError"]
