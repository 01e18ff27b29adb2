"""Flag challenges and the driver verifying a client against them."""

from .challenges import CHALLENGES, FlagChallenge, get_challenge
from .driver import check_flag
from .exceptions import ClientUnreachableError, FlagAssertionError, FlagCheckError
from .expectations import BlockHashExpectation, Expectation, HeadNumberExpectation

__all__ = (
    "BlockHashExpectation",
    "CHALLENGES",
    "ClientUnreachableError",
    "Expectation",
    "FlagAssertionError",
    "FlagChallenge",
    "FlagCheckError",
    "HeadNumberExpectation",
    "check_flag",
    "get_challenge",
)
