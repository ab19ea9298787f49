from typing import Any, Mapping, Optional, Tuple

from flask import current_app

from learnplaces.application.blocks.new_block import default_visibility
from learnplaces.application.lookup import anchor_for, container_blocks, get_accordion
from learnplaces.domain import ordering
from learnplaces.domain.invariants.block import (
    assert_block_media,
    assert_block_placement,
    assert_block_sequence,
)
from learnplaces.extensions import db
from learnplaces.forms.block import get_form
from learnplaces.models.block import Block
from learnplaces.models.learnplace import Learnplace
from learnplaces.utils.audit import log_action
from learnplaces.utils.media import delete_file, save_file
from learnplaces.utils.transaction import transactional


def create_block(
    *,
    learnplace: Learnplace,
    kind: str,
    data: Mapping[str, Any],
    files: Optional[Mapping[str, Any]] = None,
    position: Optional[int] = None,
    accordion_id: Optional[int] = None,
) -> Tuple[Block, str]:
    """
    Create a block and insert it into the learnplace or one of its accordions.

    Edge cases handled:
    - Invalid form data (ValidationError, nothing stored)
    - Accordion of another learnplace (NotFoundError)
    - Out of range positions are clamped
    - Stored uploads are removed again if the transaction fails

    Returns the block and the anchor to scroll to.
    """
    form = get_form(kind)
    cleaned = form.get_block_data(data, files, creating=True)

    accordion = get_accordion(learnplace, accordion_id) if accordion_id else None

    block = Block()
    block.sequence = 0
    block.visibility = default_visibility(learnplace)
    form.apply(block, cleaned)

    # 🔒 One map per learnplace, no nesting of accordions
    assert_block_placement(learnplace, block, accordion)

    media_url = None
    try:
        with transactional():
            if "file" in cleaned:
                media_url = save_file(cleaned["file"], kind)
                block.media_url = media_url

            siblings = container_blocks(learnplace, accordion)

            block.learnplace = learnplace
            block.accordion_id = accordion.id if accordion is not None else None
            ordering.insert(siblings, block, position)
            db.session.add(block)

            assert_block_media(block)
            assert_block_sequence(siblings)

            db.session.flush()  # ensures block.id is available

            log_action(
                action="block.create",
                entity_type="block",
                entity_id=block.id,
                payload={
                    "learnplace_id": learnplace.id,
                    "accordion_id": block.accordion_id,
                    "type": block.type,
                    "sequence": block.sequence,
                },
            )
    except Exception:
        if media_url:
            delete_file(media_url)
        raise

    current_app.logger.info(
        "Created %s block %s in learnplace %s at sequence %s",
        block.type, block.id, learnplace.id, block.sequence,
    )
    return block, anchor_for(learnplace, block)
