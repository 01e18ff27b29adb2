"""JSON-RPC methods used to query the client under test."""

from itertools import count
from typing import Any, ClassVar, Dict, Literal, Union

import requests
from pydantic import ValidationError

from ethereum_flags_base_types import Hash

from .types import JSONRPCError, RPCBlock, RPCReplyError

BlockNumberType = Union[int, Literal["latest", "earliest", "pending", "safe", "finalized"]]


class BaseRPC:
    """Represents a base RPC class for every RPC call made to the client under test."""

    namespace: ClassVar[str]

    def __init__(
        self,
        url: str,
        extra_headers: Dict | None = None,
        timeout: float | None = None,
    ):
        """
        Initialize BaseRPC class with the given url.

        `timeout` bounds each HTTP request, in seconds; `None` waits indefinitely.
        """
        if extra_headers is None:
            extra_headers = {}
        self.url = url
        self.request_id_counter = count(1)
        self.extra_headers = extra_headers
        self.timeout = timeout

    def __init_subclass__(cls) -> None:
        """Set namespace of the RPC class to the lowercase of the class name."""
        namespace = cls.__name__
        if namespace.endswith("RPC"):
            namespace = namespace[:-3]
        cls.namespace = namespace.lower()

    def post_request(self, method: str, *params: Any, extra_headers: Dict | None = None) -> Any:
        """Send JSON-RPC POST request to the client RPC server at port defined in the url."""
        if extra_headers is None:
            extra_headers = {}
        assert self.namespace, "RPC namespace not set"

        payload = {
            "jsonrpc": "2.0",
            "method": f"{self.namespace}_{method}",
            "params": params,
            "id": next(self.request_id_counter),
        }
        base_header = {
            "Content-Type": "application/json",
        }
        headers = base_header | self.extra_headers | extra_headers

        response = requests.post(self.url, json=payload, headers=headers, timeout=self.timeout)
        response.raise_for_status()
        response_json = response.json()
        rpc_method = payload["method"]

        if not isinstance(response_json, dict):
            raise RPCReplyError(rpc_method, "reply is not a JSON object")
        if "error" in response_json:
            error = response_json["error"]
            if not isinstance(error, dict) or "code" not in error or "message" not in error:
                raise RPCReplyError(rpc_method, f"invalid error object {error!r}")
            raise JSONRPCError(**error)
        if "result" not in response_json:
            raise RPCReplyError(rpc_method, "reply has no result field")
        return response_json["result"]


class EthRPC(BaseRPC):
    """Represents an `eth_X` RPC class for the default ethereum RPC methods used by the harness."""

    @staticmethod
    def _quantity(method: str, value: Any) -> int:
        """Parse a hex-encoded quantity result."""
        try:
            return int(value, 16)
        except (TypeError, ValueError) as e:
            raise RPCReplyError(method, f"invalid quantity {value!r}") from e

    @staticmethod
    def _block(method: str, value: Any) -> RPCBlock | None:
        """Parse a block result, which is `null` for unknown blocks."""
        if value is None:
            return None
        try:
            return RPCBlock.model_validate(value)
        except ValidationError as e:
            error = e.errors()[0]
            field = ".".join(str(loc) for loc in error["loc"]) or "result"
            raise RPCReplyError(method, f"{field}: {error['msg']}") from e

    def block_number(self) -> int:
        """`eth_blockNumber`: Returns the number of the most recent block."""
        return self._quantity("eth_blockNumber", self.post_request("blockNumber"))

    def chain_id(self) -> int:
        """`eth_chainId`: Returns the chain id the client is configured with."""
        return self._quantity("eth_chainId", self.post_request("chainId"))

    def get_block_by_number(
        self, block_number: BlockNumberType = "latest", full_txs: bool = False
    ) -> RPCBlock | None:
        """`eth_getBlockByNumber`: Returns information about a block by block number."""
        block = hex(block_number) if isinstance(block_number, int) else block_number
        response = self.post_request("getBlockByNumber", block, full_txs)
        return self._block("eth_getBlockByNumber", response)

    def get_block_by_hash(self, block_hash: Hash, full_txs: bool = False) -> RPCBlock | None:
        """`eth_getBlockByHash`: Returns information about a block by hash."""
        response = self.post_request("getBlockByHash", f"{block_hash}", full_txs)
        return self._block("eth_getBlockByHash", response)
