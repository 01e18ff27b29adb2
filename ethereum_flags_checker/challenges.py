"""
Registry of the flag challenges the harness can check.

A challenge pairs a genesis description and a chain file with the single
value the client must report after importing them.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict

from config import HarnessConfig
from ethereum_flags_base_types import Hash

from .expectations import BlockHashExpectation, Expectation, HeadNumberExpectation

defaults = HarnessConfig()


@dataclass(frozen=True)
class FlagChallenge:
    """A chain fixture and the value that proves the client accepted it."""

    name: str
    description: str
    expectation: Expectation
    genesis_file: Path = defaults.GENESIS_FILE
    chain_file: Path = defaults.CHAIN_FILE


CHALLENGES: Dict[str, FlagChallenge] = {
    challenge.name: challenge
    for challenge in (
        FlagChallenge(
            name="wrong-price",
            description=(
                "Block 1 pays a transaction fee the client must account for; "
                "the flag is the hash of block 1 as stored by the client."
            ),
            expectation=BlockHashExpectation(
                hash=Hash("0x31553f1bb856b900a24d456f51ac4372fa57e08c5a16812db3ff87e63320bf26"),
                block=1,
            ),
        ),
        FlagChallenge(
            name="chain-import",
            description="The client imports a one block chain and reports it as its head.",
            expectation=HeadNumberExpectation(number=1),
        ),
    )
}


def get_challenge(name: str) -> FlagChallenge:
    """Return the registered challenge called `name`."""
    try:
        return CHALLENGES[name]
    except KeyError:
        raise KeyError(
            f"unknown challenge {name!r}, expected one of: {', '.join(sorted(CHALLENGES))}"
        ) from None
