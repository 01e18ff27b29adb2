"""Local pytest configuration shared by the harness package tests."""

import socket
import stat
import sys
from pathlib import Path
from typing import Callable, List, Tuple

import pytest

from ethereum_flags_base_types import Address
from ethereum_flags_fixtures import Block, BlockHeader, Chain, GenesisSpec

FAKE_GETH_SCRIPT = '''#!{python}
"""Stand-in for a geth binary: records its arguments and serves a minimal JSON-RPC API."""
import json
import os
import signal
import sys
import time
from http.server import BaseHTTPRequestHandler, HTTPServer

args = sys.argv[1:]
if os.environ.get("FAKE_GETH_LOG"):
    with open(os.environ["FAKE_GETH_LOG"], "a") as f:
        f.write(" ".join(args) + "\\n")

options = dict(arg[2:].split("=", 1) for arg in args if arg.startswith("--") and "=" in arg)
if "datadir" in options:
    os.makedirs(os.path.join(options["datadir"], "geth"), exist_ok=True)

positional = [arg for arg in args if not arg.startswith("-")]
if positional:
    command = positional[0]
    if os.environ.get("FAKE_GETH_FAIL") == command:
        print(f"Fatal: could not {{command}}", file=sys.stderr)
        sys.exit(1)
    print(f"{{command}} done")
    sys.exit(0)

if os.environ.get("FAKE_GETH_IGNORE_TERM"):
    signal.signal(signal.SIGTERM, signal.SIG_IGN)

if os.environ.get("FAKE_GETH_NO_RPC"):
    while True:
        time.sleep(1)

head = int(os.environ.get("FAKE_GETH_HEAD", "0"))
head_hash = os.environ.get("FAKE_GETH_HEAD_HASH", "0x" + "00" * 32)


class Handler(BaseHTTPRequestHandler):
    def do_POST(self):
        request = json.loads(self.rfile.read(int(self.headers["Content-Length"])))
        reply = {{"jsonrpc": "2.0", "id": request["id"]}}
        if request["method"] == "eth_blockNumber":
            reply["result"] = hex(head)
        elif request["method"] == "eth_chainId":
            reply["result"] = "0x539"
        elif request["method"] in ("eth_getBlockByNumber", "eth_getBlockByHash"):
            reply["result"] = {{"number": hex(head), "hash": head_hash}}
        else:
            reply["error"] = {{"code": -32601, "message": "method not found"}}
        body = json.dumps(reply).encode()
        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, *args):
        pass


HTTPServer((options["http.addr"], int(options["http.port"])), Handler).serve_forever()
'''


@pytest.fixture
def free_port() -> int:
    """Return a local TCP port that is currently not in use."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


@pytest.fixture
def fake_geth_root(tmp_path: Path) -> Path:
    """
    Return a client source directory holding an already built fake geth binary.

    The fake binary is configured through environment variables:
    `FAKE_GETH_HEAD`, `FAKE_GETH_HEAD_HASH`, `FAKE_GETH_FAIL` (subcommand to fail),
    `FAKE_GETH_NO_RPC`, `FAKE_GETH_IGNORE_TERM` (survive SIGTERM) and `FAKE_GETH_LOG`
    (file receiving each invocation).
    """
    if sys.platform == "win32":
        pytest.skip("the fake geth binary is a POSIX script")
    root = tmp_path / "go-ethereum"
    binary = root / "build" / "bin" / "geth"
    binary.parent.mkdir(parents=True)
    binary.write_text(FAKE_GETH_SCRIPT.format(python=sys.executable))
    binary.chmod(binary.stat().st_mode | stat.S_IEXEC)
    return root


@pytest.fixture
def genesis() -> GenesisSpec:
    """Return a genesis description with one pre-funded account."""
    return GenesisSpec.model_validate(
        {
            "config": {
                "chainId": 1337,
                "homesteadBlock": 0,
                "eip150Block": 0,
                "eip155Block": 0,
                "eip158Block": 0,
                "byzantiumBlock": 0,
                "constantinopleBlock": 0,
                "petersburgBlock": 0,
                "istanbulBlock": 0,
                "berlinBlock": 0,
                "londonBlock": 0,
                "ethash": {},
            },
            "alloc": {
                "0x71562b71999873db5b286df957af199ec94617f7": {"balance": "0xde0b6b3a7640000"},
            },
            "gasLimit": "0x47b760",
            "extraData": "0x",
        }
    )


@pytest.fixture
def make_block() -> Callable[[Block], Block]:
    """Return a factory building an empty child block of the given parent."""

    def make(parent: Block, *, number: int | None = None) -> Block:
        header = BlockHeader(
            parent_hash=parent.hash,
            fee_recipient=Address(0x1111),
            state_root=parent.header.state_root,
            difficulty=parent.header.difficulty,
            number=parent.number + 1 if number is None else number,
            gas_limit=parent.header.gas_limit,
            timestamp=parent.header.timestamp + 10,
            base_fee_per_gas=parent.header.base_fee_per_gas,
        )
        return Block(header=header)

    return make


@pytest.fixture
def chain(genesis: GenesisSpec, make_block: Callable[..., Block]) -> Chain:
    """Return a chain of two blocks on top of the genesis block."""
    genesis_block = genesis.to_block()
    block_1 = make_block(genesis_block)
    return Chain(genesis, [block_1, make_block(block_1)])


@pytest.fixture
def write_fixture_files(tmp_path: Path) -> Callable[..., Tuple[Path, Path]]:
    """Return a function writing a genesis and chain file pair into a fresh directory."""

    def write(genesis: GenesisSpec, blocks: List[Block], chain_name: str = "chain.rlp"):
        directory = tmp_path / "fixtures"
        directory.mkdir(exist_ok=True)
        chain_path, genesis_path = directory / chain_name, directory / "genesis.json"
        Chain(genesis, blocks).dump(chain_path, genesis_path)
        return chain_path, genesis_path

    return write
