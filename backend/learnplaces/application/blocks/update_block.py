from typing import Any, Mapping, Optional, Tuple

from flask import current_app

from learnplaces.application.lookup import anchor_for, get_block
from learnplaces.domain.invariants.block import assert_block_media
from learnplaces.forms.block import get_form
from learnplaces.models.block import Block
from learnplaces.models.learnplace import Learnplace
from learnplaces.utils.audit import log_action
from learnplaces.utils.media import delete_file, save_file
from learnplaces.utils.transaction import transactional


def update_block(
    *,
    learnplace: Learnplace,
    block_id: int,
    data: Mapping[str, Any],
    files: Optional[Mapping[str, Any]] = None,
) -> Tuple[Block, str]:
    """
    Update the payload of a block.

    Design rules:
    - The block keeps its type, container and sequence
    - A new upload replaces the old file, which is deleted afterwards
    """
    block = get_block(learnplace, block_id)
    form = get_form(block.type, block)
    cleaned = form.get_block_data(data, files, creating=False)

    sequence = block.sequence
    accordion_id = block.accordion_id
    old_media_url = None
    new_media_url = None

    try:
        with transactional():
            form.apply(block, cleaned)

            if "file" in cleaned:
                old_media_url = block.media_url
                new_media_url = save_file(cleaned["file"], block.type)
                block.media_url = new_media_url

            block.sequence = sequence
            block.accordion_id = accordion_id

            assert_block_media(block)

            changed_fields = sorted(field for field in cleaned if field != "file")
            if new_media_url:
                changed_fields.append("media")

            log_action(
                action="block.update",
                entity_type="block",
                entity_id=block.id,
                payload={"fields": changed_fields},
            )
    except Exception:
        if new_media_url:
            delete_file(new_media_url)
        raise

    if old_media_url:
        delete_file(old_media_url)

    current_app.logger.info(
        "Updated %s block %s in learnplace %s (%s)",
        block.type, block.id, learnplace.id, ", ".join(changed_fields) or "no changes",
    )
    return block, anchor_for(learnplace, block)
