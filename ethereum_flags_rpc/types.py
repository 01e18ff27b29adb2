"""Types used to describe the replies of a client's JSON-RPC API."""

from ethereum_flags_base_types import CamelModel, Hash, HexNumber


class JSONRPCError(Exception):
    """Model to parse a JSON RPC error response."""

    code: int
    message: str

    def __init__(self, code: int | str, message: str, **kwargs):
        """Initialize the JSONRPCError."""
        super().__init__(message)
        self.code = int(code)
        self.message = message

    def __str__(self) -> str:
        """Return string representation of the JSONRPCError."""
        return f"JSONRPCError(code={self.code}, message={self.message})"


class RPCReplyError(Exception):
    """Exception raised when a JSON-RPC reply does not have the expected shape."""

    def __init__(self, method: str, reason: str):
        """Initialize the RPCReplyError."""
        self.method = method
        self.reason = reason
        super().__init__(f"malformed reply to {method}: {reason}")


class RPCBlock(CamelModel):
    """
    Block as returned by `eth_getBlockByNumber` and `eth_getBlockByHash`.

    Only the identity of the block is modeled; the remaining fields of the reply
    are ignored.
    """

    number: HexNumber
    hash: Hash
    parent_hash: Hash | None = None
