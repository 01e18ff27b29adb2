"""go-ethereum client interface."""

from pathlib import Path
from typing import List

from ..ethereum_client import EthereumClient


class GethClient(EthereumClient):
    """
    go-ethereum `geth` client built from a source checkout.

    The checkout is built with its own `build/ci.go` script, which places the
    binary under `build/bin`.
    """

    client_name = "geth"

    @property
    def binary(self) -> Path:
        """Return the path of the `geth` binary inside the source checkout."""
        return self.path / "build" / "bin" / "geth"

    def build_command(self) -> List[str]:
        """Return the command building `geth` from the checkout."""
        return ["go", "run", "build/ci.go", "install", "./cmd/geth"]

    def _common_options(self) -> List[str]:
        options = [f"--datadir={self.args.data_dir}", f"--verbosity={int(self.args.log_level)}"]
        if self.args.fake_pow:
            options.insert(0, "--fakepow")
        return options

    def init_commands(self) -> List[List[str]]:
        """Return the `geth init` and `geth import` commands."""
        return [
            [str(self.binary), *self._common_options(), "init", str(self.args.genesis_path)],
            [str(self.binary), *self._common_options(), "import", str(self.args.chain_path)],
        ]

    def start_command(self) -> List[str]:
        """
        Return the command running `geth` isolated from the network.

        Peer discovery is disabled and no peer is ever dialed; only the
        JSON-RPC HTTP endpoint is served.
        """
        return [
            str(self.binary),
            *self._common_options(),
            f"--port={self.args.network_port}",
            "--nodiscover",
            "--maxpeers=0",
            "--nat=none",
            "--http",
            f"--http.api={','.join(self.args.http_api)}",
            f"--http.addr={self.args.http_host}",
            f"--http.port={self.args.http_port}",
        ]
