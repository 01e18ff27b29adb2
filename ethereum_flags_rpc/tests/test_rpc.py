"""Test suite for the JSON-RPC client."""

from typing import Any, Dict, List

import pytest
import requests

from ethereum_flags_base_types import Hash

from ..rpc import EthRPC
from ..types import JSONRPCError, RPCReplyError


class FakeResponse:
    """Minimal stand-in for `requests.Response`."""

    def __init__(self, body: Dict[str, Any], status_code: int = 200):
        self.body = body
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self) -> Dict[str, Any]:
        return self.body


class PostRecorder(list):
    """Requests sent so far, plus the replies queued for the next ones."""

    def __init__(self):
        super().__init__()
        self.replies: List[FakeResponse] = []

    def __call__(self, url, json, headers, timeout):
        self.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        return self.replies.pop(0)


@pytest.fixture
def posted(monkeypatch) -> PostRecorder:
    """Record every request and reply with the next queued response."""
    recorder = PostRecorder()
    monkeypatch.setattr(requests, "post", recorder)
    return recorder


def reply(posted, result: Any = None, *, error: Dict | None = None, status: int = 200):
    """Queue a reply for the next request."""
    body: Dict[str, Any] = {"jsonrpc": "2.0", "id": 1}
    if error is not None:
        body["error"] = error
    else:
        body["result"] = result
    posted.replies.append(FakeResponse(body, status))


def test_block_number(posted):
    """Test the payload of `eth_blockNumber` and the parsing of its reply."""
    reply(posted, "0x1")
    rpc = EthRPC("http://localhost:8545", timeout=1.5)
    assert rpc.block_number() == 1

    request = posted[0]
    assert request["url"] == "http://localhost:8545"
    assert request["timeout"] == 1.5
    assert request["headers"]["Content-Type"] == "application/json"
    assert request["json"]["method"] == "eth_blockNumber"
    assert request["json"]["jsonrpc"] == "2.0"


def test_request_ids_increment(posted):
    """Test that each request carries a new id."""
    rpc = EthRPC("http://localhost:8545")
    for _ in range(3):
        reply(posted, "0x539")
        assert rpc.chain_id() == 1337
    assert [request["json"]["id"] for request in posted] == [1, 2, 3]


@pytest.mark.parametrize(
    "block, expected_param",
    [(1, "0x1"), ("latest", "latest"), (0, "0x0")],
)
def test_get_block_by_number(posted, block, expected_param):
    """Test that block numbers are sent as hex and the reply is validated."""
    block_hash = "0x" + "ab" * 32
    reply(posted, {"number": "0x1", "hash": block_hash, "gasLimit": "0x1c9c380"})
    result = EthRPC("http://localhost:8545").get_block_by_number(block)
    assert result is not None
    assert result.number == 1
    assert result.hash == Hash(block_hash)
    assert posted[0]["json"]["params"] == (expected_param, False)


def test_get_block_by_hash_missing(posted):
    """Test that an unknown block is reported as `None`."""
    reply(posted, None)
    assert EthRPC("http://localhost:8545").get_block_by_hash(Hash(1)) is None
    assert posted[0]["json"]["method"] == "eth_getBlockByHash"
    assert posted[0]["json"]["params"][0] == "0x" + "00" * 31 + "01"


def test_json_rpc_error(posted):
    """Test that an error reply raises `JSONRPCError`."""
    reply(posted, error={"code": -32601, "message": "method not found"})
    with pytest.raises(JSONRPCError) as e:
        EthRPC("http://localhost:8545").block_number()
    assert e.value.code == -32601
    assert str(e.value) == "JSONRPCError(code=-32601, message=method not found)"


def test_http_error(posted):
    """Test that HTTP errors are raised by `requests`."""
    reply(posted, "0x1", status=503)
    with pytest.raises(requests.HTTPError):
        EthRPC("http://localhost:8545").block_number()


@pytest.mark.parametrize(
    "result, field",
    [
        pytest.param({"number": "0x1"}, "hash", id="missing_hash"),
        pytest.param({"number": "0x1", "hash": "0x12"}, "hash", id="short_hash"),
        pytest.param({"number": None, "hash": "0x" + "ab" * 32}, "number", id="null_number"),
        pytest.param("0x1", "result", id="not_an_object"),
    ],
)
def test_malformed_block_reply(posted, result: Any, field: str):
    """Test that a block reply of the wrong shape raises `RPCReplyError`."""
    reply(posted, result)
    with pytest.raises(RPCReplyError) as e:
        EthRPC("http://localhost:8545").get_block_by_number(1)
    assert e.value.method == "eth_getBlockByNumber"
    assert e.value.reason.startswith(f"{field}:")
    assert "\n" not in str(e.value)


@pytest.mark.parametrize("result", [None, 1, "latest", {"number": "0x1"}])
def test_malformed_quantity_reply(posted, result: Any):
    """Test that an `eth_blockNumber` result that is not a hex quantity raises `RPCReplyError`."""
    reply(posted, result)
    with pytest.raises(RPCReplyError, match="malformed reply to eth_blockNumber: invalid quantity"):
        EthRPC("http://localhost:8545").block_number()


@pytest.mark.parametrize(
    "body",
    [
        pytest.param(["not", "an", "object"], id="not_an_object"),
        pytest.param({"jsonrpc": "2.0", "id": 1}, id="no_result"),
        pytest.param({"jsonrpc": "2.0", "id": 1, "error": "boom"}, id="invalid_error"),
    ],
)
def test_malformed_envelope(posted, body: Any):
    """Test that a reply that is not a JSON-RPC response raises `RPCReplyError`."""
    posted.replies.append(FakeResponse(body))
    with pytest.raises(RPCReplyError):
        EthRPC("http://localhost:8545").chain_id()
