"""Run one flag check: load the fixture, drive the client and verify its answer."""

from threading import Event

from config import HarnessConfig
from ethereum_flags_clients import EthereumClient
from ethereum_flags_fixtures import Chain, load_chain
from ethereum_flags_logging import get_logger
from ethereum_flags_rpc import EthRPC

from .challenges import FlagChallenge
from .exceptions import ClientUnreachableError

logger = get_logger(__name__)

defaults = HarnessConfig()


def check_flag(
    challenge: FlagChallenge,
    client: EthereumClient,
    *,
    ready_timeout: float = defaults.READY_TIMEOUT,
    skip_compile: bool = False,
    verbose: bool = False,
    cancel: Event | None = None,
) -> Chain:
    """
    Check that `client` captures the flag of `challenge`.

    The genesis and chain files the client is given are loaded first, so a
    malformed fixture is reported before the client is built. The client is
    closed on every exit path. Errors of each stage propagate unchanged.

    Returns the chain the client imported.
    """
    chain = load_chain(client.args.chain_path, client.args.genesis_path)
    logger.info(f"Checking challenge {challenge.name}: {challenge.expectation.describe()}")
    with client:
        if skip_compile:
            client.skip_compile()
        else:
            client.compile(verbose=verbose)
        client.init(verbose=verbose)
        client.start(verbose=verbose)
        if not client.running(timeout=ready_timeout, cancel=cancel):
            raise ClientUnreachableError(client.http_addr, ready_timeout)
        challenge.expectation.verify(EthRPC(client.http_addr, timeout=ready_timeout))
    logger.info(f"Flag captured for challenge {challenge.name}")
    return chain
