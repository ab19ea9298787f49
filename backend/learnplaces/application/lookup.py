from typing import List, Optional

from learnplaces.domain.block_types import ACCORDION
from learnplaces.domain.exceptions import NotFoundError
from learnplaces.extensions import db
from learnplaces.models.block import Block
from learnplaces.models.learnplace import Learnplace

ANCHOR_TEMPLATE = "block_"


def get_learnplace(learnplace_id) -> Learnplace:
    learnplace = db.session.get(Learnplace, learnplace_id)
    if learnplace is None:
        raise NotFoundError(f"Learnplace {learnplace_id} not found")
    return learnplace


def get_block(learnplace: Learnplace, block_id) -> Block:
    """
    Resolve ``block_id`` inside ``learnplace``.
    Ids of blocks owned by another learnplace are treated as unknown.
    """
    block = learnplace.find_block(block_id)
    if block is None:
        raise NotFoundError(f"Block {block_id} not found in learnplace {learnplace.id}")
    return block


def get_accordion(learnplace: Learnplace, accordion_id) -> Block:
    accordion = learnplace.find_block(accordion_id)
    if accordion is None or accordion.type != ACCORDION:
        raise NotFoundError(f"Accordion {accordion_id} not found in learnplace {learnplace.id}")
    return accordion


def container_of(learnplace: Learnplace, block: Block) -> Optional[Block]:
    """The accordion holding ``block``, None for top level blocks."""
    if block.accordion_id is None:
        return None
    return get_accordion(learnplace, block.accordion_id)


def container_blocks(learnplace: Learnplace, accordion: Optional[Block] = None) -> List[Block]:
    if accordion is None:
        return list(learnplace.blocks)
    return list(accordion.children)


def anchor_for(learnplace: Learnplace, block: Block) -> str:
    """Scroll anchor of the top level block that shows ``block``."""
    accordion = container_of(learnplace, block)
    if accordion is not None:
        return f"{ANCHOR_TEMPLATE}{accordion.sequence}"
    return f"{ANCHOR_TEMPLATE}{block.sequence}"
