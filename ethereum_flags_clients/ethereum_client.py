"""Abstract base class to drive an Ethereum execution client through a flag check."""

import shutil
import subprocess
import time
from abc import ABC, abstractmethod
from pathlib import Path
from threading import Event
from typing import ClassVar, Dict, List, Optional, Type

import requests

from config import HarnessConfig
from ethereum_flags_logging import get_logger
from ethereum_flags_rpc import EthRPC, JSONRPCError, RPCReplyError

from .exceptions import (
    ClientBuildError,
    ClientInitError,
    ClientStartError,
    ClientStateError,
    UnknownClientError,
)
from .types import ClientArgs, ClientState

logger = get_logger(__name__)

defaults = HarnessConfig()

OUTPUT_FD = 2
"""File descriptor receiving the client output in verbose mode, keeping stdout for the verdict."""


class EthereumClient(ABC):
    """
    Abstract base class of a client under test.

    A client goes through `compile` (or `skip_compile`), `init` and `start`, in
    that order, after which `running` polls its JSON-RPC API until it answers.
    `close` can be called from any state, any number of times: it stops the
    client process and removes the client data directory.

    Subclasses implement one client family and register themselves under their
    `client_name`.
    """

    registered_clients: ClassVar[Dict[str, Type["EthereumClient"]]] = {}
    client_name: ClassVar[str]

    path: Path
    args: ClientArgs
    state: ClientState
    process: Optional[subprocess.Popen]

    def __init__(self, path: Path | str, args: ClientArgs | None = None):
        """Initialize the client rooted at the source directory `path`."""
        self.path = Path(path)
        self.args = args if args is not None else ClientArgs()
        self.state = ClientState.UNINITIALIZED
        self.process = None

    def __init_subclass__(cls, **kwargs) -> None:
        """Register all subclasses that name a client family."""
        super().__init_subclass__(**kwargs)
        if "client_name" in cls.__dict__:
            EthereumClient.registered_clients[cls.client_name] = cls

    @classmethod
    def from_name(
        cls, name: str, path: Path | str, args: ClientArgs | None = None
    ) -> "EthereumClient":
        """Instantiate the client family registered as `name`."""
        try:
            client_class = cls.registered_clients[name]
        except KeyError:
            raise UnknownClientError(name, sorted(cls.registered_clients)) from None
        return client_class(path, args)

    def __enter__(self) -> "EthereumClient":
        """Return the client; it is closed when the context is left."""
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        """Close the client on every exit path."""
        self.close()

    def __repr__(self) -> str:
        """Return a short description of the client."""
        return f"{self.__class__.__name__}(path={str(self.path)!r}, state={self.state.value})"

    @property
    @abstractmethod
    def binary(self) -> Path:
        """Path of the client executable produced by `compile`."""
        pass

    @abstractmethod
    def build_command(self) -> List[str]:
        """Return the command, run in the source directory, that builds the client."""
        pass

    @abstractmethod
    def init_commands(self) -> List[List[str]]:
        """Return the commands that import the genesis and the chain, in order."""
        pass

    @abstractmethod
    def start_command(self) -> List[str]:
        """Return the command that runs the client with its JSON-RPC API enabled."""
        pass

    @property
    def http_addr(self) -> str:
        """Return the address the client serves its JSON-RPC API on."""
        return f"http://{self.args.http_host}:{self.args.http_port}"

    def _require_state(self, expected: ClientState, action: str) -> None:
        if self.state != expected:
            raise ClientStateError(
                f"cannot {action} {self.client_name} client in state {self.state.value}, "
                f"expected {expected.value}"
            )

    def _run_command(self, command: List[str], verbose: bool, cwd: Path | None = None):
        """
        Run a command to completion.

        Output is streamed to stderr when `verbose` is set and captured
        otherwise, in which case it is returned in `stdout`.
        """
        logger.verbose(f"Running {' '.join(command)}")
        if verbose:
            return subprocess.run(command, cwd=cwd, stdout=OUTPUT_FD, stderr=OUTPUT_FD, text=True)
        return subprocess.run(
            command, cwd=cwd, stdout=subprocess.PIPE, stderr=subprocess.STDOUT, text=True
        )

    def compile(self, verbose: bool = False) -> None:
        """Build the client from its source directory."""
        self._require_state(ClientState.UNINITIALIZED, "compile")
        command = self.build_command()
        logger.info(f"Building {self.client_name} in {self.path}")
        try:
            result = self._run_command(command, verbose, cwd=self.path)
        except OSError as e:
            raise ClientBuildError(f"could not run {' '.join(command)}: {e}") from e
        if result.returncode != 0:
            raise ClientBuildError(
                f"{' '.join(command)} exited with status {result.returncode}",
                output=result.stdout,
            )
        self.state = ClientState.BUILT

    def skip_compile(self) -> None:
        """Trust a previously built client binary."""
        self._require_state(ClientState.UNINITIALIZED, "skip building")
        if not self.binary.exists():
            logger.warning(f"Skipping build, but no {self.client_name} binary at {self.binary}")
        self.state = ClientState.BUILT

    def init(self, verbose: bool = False) -> None:
        """Import the genesis description and the chain file into the client data directory."""
        self._require_state(ClientState.BUILT, "initialize")
        for command in self.init_commands():
            try:
                result = self._run_command(command, verbose)
            except OSError as e:
                raise ClientInitError(command, None, str(e)) from e
            if result.returncode != 0:
                raise ClientInitError(command, result.returncode, result.stdout)
            if result.stdout:
                logger.verbose(result.stdout.rstrip())
        self.state = ClientState.INITIALIZED

    def start(self, verbose: bool = False) -> None:
        """Start the client process in the background, without waiting for it to be ready."""
        self._require_state(ClientState.INITIALIZED, "start")
        command = self.start_command()
        logger.info(f"Starting {self.client_name}, JSON-RPC at {self.http_addr}")
        logger.verbose(f"Running {' '.join(command)}")
        output = OUTPUT_FD if verbose else subprocess.DEVNULL
        try:
            self.process = subprocess.Popen(command, stdout=output, stderr=output)
        except OSError as e:
            raise ClientStartError(f"could not start {' '.join(command)}: {e}") from e
        self.state = ClientState.RUNNING

    def running(
        self,
        timeout: float = defaults.READY_TIMEOUT,
        poll_interval: float = defaults.POLL_INTERVAL,
        cancel: Event | None = None,
    ) -> bool:
        """
        Poll the client's JSON-RPC API until it answers `eth_blockNumber`.

        Returns `False` once `timeout` seconds have passed without an answer, or
        as soon as `cancel` is set. Each request is bounded by the time left.
        """
        self._require_state(ClientState.RUNNING, "poll")
        deadline = time.monotonic() + timeout
        attempts = 0
        while True:
            if cancel is not None and cancel.is_set():
                logger.debug("Readiness poll cancelled")
                return False
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                logger.debug(f"Client not ready after {attempts} attempts")
                return False
            attempts += 1
            try:
                head = EthRPC(self.http_addr, timeout=remaining).block_number()
            except (requests.RequestException, JSONRPCError, RPCReplyError) as e:
                # Client may still be starting.
                logger.debug(f"Client not ready: {e}")
            else:
                logger.info(f"Client ready at {self.http_addr}, head block {head}")
                return True
            delay = min(poll_interval, max(deadline - time.monotonic(), 0))
            if cancel is not None:
                cancel.wait(delay)
            else:
                time.sleep(delay)

    def close(self) -> None:
        """Stop the client process, if any, and remove the client data directory."""
        if self.state == ClientState.CLOSED:
            return
        if self.process is not None:
            if self.process.poll() is None:
                self.process.terminate()
                try:
                    self.process.wait(timeout=self.args.close_timeout)
                except subprocess.TimeoutExpired:
                    logger.warning(
                        f"{self.client_name} did not exit after {self.args.close_timeout}s, "
                        "killing it"
                    )
                    self.process.kill()
                    self.process.wait()
            logger.debug(f"{self.client_name} exited with status {self.process.returncode}")
        shutil.rmtree(self.args.data_dir, ignore_errors=True)
        self.state = ClientState.CLOSED
