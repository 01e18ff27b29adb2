"""Loading and writing of fixture chains: a genesis description plus a block stream."""

import zlib
from pathlib import Path
from typing import Iterable, Iterator, List, overload

from ethereum_rlp.exceptions import DecodingError

from ethereum_flags_base_types import Hash
from ethereum_flags_logging import get_logger

from .block import Block
from .exceptions import BlockDecodeError, BlockSequenceError
from .genesis import GenesisSpec, load_genesis, write_genesis
from .stream import RLPStreamReader, open_chain_file

logger = get_logger(__name__)


def blocks_from_file(chain_path: Path | str, genesis_block: Block | None = None) -> List[Block]:
    """
    Decode every block of a chain file.

    Blocks must be numbered contiguously from one: the block found at stream
    position `i` must carry the number `i + 1`. The first failure aborts the
    whole load, no partial list is returned.

    When `genesis_block` is given, a mismatch between its hash and the parent
    hash of the first block is logged; it is not an error since the client
    under test decides whether the chain is valid.
    """
    blocks: List[Block] = []
    with open_chain_file(chain_path) as f:
        reader = RLPStreamReader(f)
        index = 0
        while True:
            try:
                encoded = next(reader, None)
                if encoded is None:
                    break
                block = Block.from_rlp(encoded)
            except (DecodingError, EOFError, OSError, zlib.error) as e:
                raise BlockDecodeError(index=index, cause=e) from e
            if block.number != index + 1:
                raise BlockSequenceError(index=index, expected=index + 1, got=block.number)
            blocks.append(block)
            index += 1

    if genesis_block is not None and blocks and blocks[0].header.parent_hash != genesis_block.hash:
        logger.warning(
            f"Parent hash of block 1 ({blocks[0].header.parent_hash}) does not match "
            f"the genesis hash ({genesis_block.hash})"
        )
    logger.debug(f"Decoded {len(blocks)} blocks from {chain_path}")
    return blocks


def write_chain(blocks: Iterable[Block], chain_path: Path | str) -> None:
    """Write blocks to a chain file, compressing it when its name says so."""
    with open_chain_file(chain_path, "wb") as f:
        for block in blocks:
            f.write(block.rlp)


class Chain:
    """
    A genesis description together with the blocks built on top of it.

    Index zero is the genesis block derived from the description, followed by
    the decoded blocks in stream order.
    """

    genesis: GenesisSpec
    blocks: List[Block]

    def __init__(self, genesis: GenesisSpec, blocks: Iterable[Block] = ()):
        """Initialize the chain, deriving its genesis block."""
        self.genesis = genesis
        self.blocks = [genesis.to_block(), *blocks]

    def __len__(self) -> int:
        """Return the number of blocks, genesis included."""
        return len(self.blocks)

    @overload
    def __getitem__(self, index: int) -> Block: ...

    @overload
    def __getitem__(self, index: slice) -> List[Block]: ...

    def __getitem__(self, index):
        """Return the block(s) at the given position(s)."""
        return self.blocks[index]

    def __iter__(self) -> Iterator[Block]:
        """Iterate over the blocks, genesis first."""
        return iter(self.blocks)

    @property
    def genesis_block(self) -> Block:
        """Return the genesis block."""
        return self.blocks[0]

    @property
    def head(self) -> Block:
        """Return the last block of the chain."""
        return self.blocks[-1]

    def block_hashes(self) -> List[Hash]:
        """Return the hashes of all blocks, genesis included."""
        return [block.hash for block in self.blocks]

    def dump(self, chain_path: Path | str, genesis_path: Path | str) -> None:
        """
        Write the chain as a pair of fixture files.

        The genesis block is not part of the chain file, since clients derive it
        from the genesis description themselves.
        """
        write_genesis(self.genesis, genesis_path)
        write_chain(self.blocks[1:], chain_path)


def load_chain(chain_path: Path | str, genesis_path: Path | str) -> Chain:
    """Load a chain from its genesis description and chain files."""
    chain = Chain(load_genesis(genesis_path))
    logger.info(f"Genesis block hash: {chain.genesis_block.hash}")
    chain.blocks.extend(blocks_from_file(chain_path, chain.genesis_block))
    logger.info(f"Loaded chain of {len(chain)} blocks, head {chain.head.number} ({chain.head.hash})")
    return chain
