from flask import current_app

from learnplaces.application.lookup import container_blocks, container_of, get_block
from learnplaces.domain import ordering
from learnplaces.domain.block_types import ACCORDION
from learnplaces.domain.invariants.block import assert_block_sequence
from learnplaces.extensions import db
from learnplaces.models.learnplace import Learnplace
from learnplaces.utils.audit import log_action
from learnplaces.utils.media import delete_file
from learnplaces.utils.transaction import transactional


def delete_block(
    *,
    learnplace: Learnplace,
    block_id: int,
) -> None:
    """
    Delete a block and renumber the blocks left in its container.

    Notes:
    - Deleting an accordion deletes its children too
    - Link rows go with their block, uploads are removed after commit
    """
    block = get_block(learnplace, block_id)
    accordion = container_of(learnplace, block)
    siblings = container_blocks(learnplace, accordion)

    children = block.children if block.type == ACCORDION else []
    media_urls = [b.media_url for b in children + [block] if b.media_url]

    with transactional():
        ordering.remove(siblings, block.id)

        # Children first, they reference the accordion row
        for child in children:
            learnplace.all_blocks.remove(child)
        db.session.flush()

        learnplace.all_blocks.remove(block)

        assert_block_sequence(siblings)

        log_action(
            action="block.delete",
            entity_type="block",
            entity_id=block_id,
            payload={
                "learnplace_id": learnplace.id,
                "accordion_id": accordion.id if accordion is not None else None,
                "children": [child.id for child in children],
            },
        )

    for url in media_urls:
        delete_file(url)

    current_app.logger.info(
        "Deleted block %s from learnplace %s, %s blocks left in container",
        block_id, learnplace.id, len(siblings),
    )
