from typing import Optional, Tuple

from flask import current_app

from learnplaces.application.lookup import (
    anchor_for,
    container_blocks,
    container_of,
    get_accordion,
    get_block,
)
from learnplaces.domain import ordering
from learnplaces.domain.exceptions import ValidationError
from learnplaces.domain.invariants.block import assert_block_placement, assert_block_sequence
from learnplaces.models.block import Block
from learnplaces.models.learnplace import Learnplace
from learnplaces.utils.audit import log_action
from learnplaces.utils.transaction import transactional


def move_block(
    *,
    learnplace: Learnplace,
    block_id: int,
    position: Optional[int] = None,
    accordion_id: Optional[int] = None,
) -> Tuple[Block, str]:
    """
    Move a block to ``position`` of the learnplace or of one of its accordions.
    Same as removing it and inserting it again, both containers end up
    renumbered.
    """
    block = get_block(learnplace, block_id)
    target = get_accordion(learnplace, accordion_id) if accordion_id else None

    if target is block:
        raise ValidationError(
            "An accordion cannot be moved into itself",
            fields={"accordion": "must not be the moved block"},
        )

    assert_block_placement(learnplace, block, target)

    source = container_of(learnplace, block)

    with transactional():
        source_blocks = container_blocks(learnplace, source)
        ordering.remove(source_blocks, block.id)

        if target is source:
            target_blocks = source_blocks
        else:
            target_blocks = container_blocks(learnplace, target)
            block.accordion_id = target.id if target is not None else None

        ordering.insert(target_blocks, block, position)

        assert_block_sequence(source_blocks)
        assert_block_sequence(target_blocks)

        log_action(
            action="block.move",
            entity_type="block",
            entity_id=block.id,
            payload={
                "from_accordion_id": source.id if source is not None else None,
                "to_accordion_id": block.accordion_id,
                "sequence": block.sequence,
            },
        )

    current_app.logger.info(
        "Moved block %s in learnplace %s to accordion %s at sequence %s",
        block.id, learnplace.id, block.accordion_id, block.sequence,
    )
    return block, anchor_for(learnplace, block)
