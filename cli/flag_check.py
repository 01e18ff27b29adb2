"""
CLI entry point of the `flagcheck` command.

Checks that an execution client captures the flag of a challenge: the client is
built, fed the challenge's genesis and chain files, started, and queried once
over JSON-RPC. Only the verdict is printed to stdout.
"""

import sys
from pathlib import Path

import click
import requests

from config import HarnessConfig
from ethereum_flags_checker import CHALLENGES, FlagCheckError, check_flag, get_challenge
from ethereum_flags_clients import ClientArgs, ClientError, EthereumClient, LogLevel
from ethereum_flags_fixtures import ChainFixtureError
from ethereum_flags_logging import configure_logging, get_logger
from ethereum_flags_rpc import JSONRPCError, RPCReplyError

logger = get_logger(__name__)

defaults = HarnessConfig()

HARNESS_ERRORS = (
    ChainFixtureError,
    ClientError,
    FlagCheckError,
    JSONRPCError,
    RPCReplyError,
    requests.RequestException,
    OSError,
)


def parse_log_level(ctx: click.Context, param: click.Parameter, value: str) -> LogLevel:
    """Convert the `--loglevel` choice."""
    return LogLevel.from_cli(value)


@click.command()
@click.option(
    "--challenge",
    type=click.Choice(sorted(CHALLENGES)),
    default="wrong-price",
    show_default=True,
    help="Challenge whose flag the client must capture.",
)
@click.option(
    "--client",
    "client_name",
    type=click.Choice(sorted(EthereumClient.registered_clients)),
    default="geth",
    show_default=True,
    help="Client family under test.",
)
@click.option(
    "--client-path",
    type=click.Path(file_okay=False, path_type=Path),
    default=defaults.CLIENT_PATH,
    show_default=True,
    help="Source directory of the client under test.",
)
@click.option(
    "--genesis",
    "genesis_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Genesis description, defaults to the challenge's.",
)
@click.option(
    "--chain",
    "chain_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Chain file, optionally gzip-compressed, defaults to the challenge's.",
)
@click.option(
    "--datadir",
    "data_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=defaults.DATA_DIR,
    show_default=True,
    help="Client data directory, removed when the check ends.",
)
@click.option(
    "--loglevel",
    "log_level",
    type=click.Choice([level.name.lower() for level in LogLevel], case_sensitive=False),
    default="error",
    show_default=True,
    callback=parse_log_level,
    help="Verbosity of the client and of the harness.",
)
@click.option("--quiet", "-q", is_flag=True, help="Do not stream the client output to stderr.")
@click.option("--skip-build", is_flag=True, help="Use the client binary built by a previous run.")
@click.option(
    "--fakepow/--no-fakepow",
    "fake_pow",
    default=True,
    show_default=True,
    help="Disable proof-of-work verification in the client.",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0),
    default=defaults.READY_TIMEOUT,
    show_default=True,
    help="Seconds to wait for the client's JSON-RPC API.",
)
@click.option("--network-port", type=click.IntRange(0, 65535), default=defaults.NETWORK_PORT)
@click.option("--http-host", default=defaults.HTTP_HOST, show_default=True)
@click.option("--http-port", type=click.IntRange(0, 65535), default=defaults.HTTP_PORT)
def flagcheck(
    challenge: str,
    client_name: str,
    client_path: Path,
    genesis_path: Path | None,
    chain_path: Path | None,
    data_dir: Path,
    log_level: LogLevel,
    quiet: bool,
    skip_build: bool,
    fake_pow: bool,
    timeout: float,
    network_port: int,
    http_host: str,
    http_port: int,
) -> None:
    """
    Check that an Ethereum client captures the flag of a challenge.
    """
    configure_logging(log_level=log_level.to_logging_level())
    flag_challenge = get_challenge(challenge)
    args = ClientArgs(
        data_dir=data_dir,
        genesis_path=genesis_path or flag_challenge.genesis_file,
        chain_path=chain_path or flag_challenge.chain_file,
        fake_pow=fake_pow,
        log_level=log_level,
        network_port=network_port,
        http_host=http_host,
        http_port=http_port,
    )
    client = EthereumClient.from_name(client_name, client_path, args)
    try:
        check_flag(
            flag_challenge,
            client,
            ready_timeout=timeout,
            skip_compile=skip_build,
            verbose=not quiet,
        )
    except HARNESS_ERRORS as e:
        logger.debug("Flag check failed", exc_info=e)
        # Captured client output follows the first line of build and init errors.
        reason, *output = str(e).splitlines() or [type(e).__name__]
        if output:
            logger.error("\n".join(output))
        logger.fail(f"Challenge {challenge} failed against {client}: {reason}")
        click.echo(f"Flag not captured: {reason}", err=True)
        sys.exit(1)
    click.echo("Flag captured.")


def main() -> None:
    """Run the `flagcheck` command."""
    flagcheck()


if __name__ == "__main__":
    main()
