"""Chain fixtures: genesis descriptions and block streams fed to the client under test."""

from .block import Block, BlockHeader
from .chain import Chain, blocks_from_file, load_chain, write_chain
from .exceptions import (
    BlockDecodeError,
    BlockSequenceError,
    ChainFixtureError,
    MalformedGenesisError,
)
from .genesis import ChainConfig, GenesisAccount, GenesisSpec, load_genesis, write_genesis
from .stream import RLPStreamReader, open_chain_file
from .trie import trie_root

__all__ = (
    "Block",
    "BlockDecodeError",
    "BlockHeader",
    "BlockSequenceError",
    "Chain",
    "ChainConfig",
    "ChainFixtureError",
    "GenesisAccount",
    "GenesisSpec",
    "MalformedGenesisError",
    "RLPStreamReader",
    "blocks_from_file",
    "load_chain",
    "load_genesis",
    "open_chain_file",
    "trie_root",
    "write_chain",
    "write_genesis",
)
