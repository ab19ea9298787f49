"""
Ordered block collections.

A learnplace and an accordion both own an ordered list of blocks. The list
order is the source of truth, ``sequence`` is derived from it and always
forms a contiguous run ``1..n``.

The helpers work on any mutable sequence of objects exposing ``id`` and
``sequence`` attributes, which includes SQLAlchemy relationship lists.
"""
from typing import Any, MutableSequence, Optional

from .exceptions import NotFoundError


def clamp_position(position: Optional[int], length: int) -> int:
    """
    Clamp an insert position to ``[0, length]``.
    A missing position means "append".
    """
    if position is None:
        return length
    return max(0, min(int(position), length))


def regenerate_sequence(blocks: MutableSequence[Any]) -> MutableSequence[Any]:
    for index, block in enumerate(blocks, start=1):
        block.sequence = index
    return blocks


def index_of(blocks: MutableSequence[Any], block_id) -> int:
    for index, block in enumerate(blocks):
        if block.id == block_id:
            return index
    raise NotFoundError(f"Block {block_id} is not part of this container")


def insert(blocks: MutableSequence[Any], block, position: Optional[int] = None) -> MutableSequence[Any]:
    blocks.insert(clamp_position(position, len(blocks)), block)
    return regenerate_sequence(blocks)


def remove(blocks: MutableSequence[Any], block_id):
    """
    Remove the block with ``block_id`` and renumber the remaining ones.
    Returns the removed block. The list is untouched if the id is unknown.
    """
    index = index_of(blocks, block_id)
    removed = blocks.pop(index)
    regenerate_sequence(blocks)
    return removed


def move(blocks: MutableSequence[Any], block_id, position: Optional[int] = None) -> MutableSequence[Any]:
    block = remove(blocks, block_id)
    return insert(blocks, block, position)
