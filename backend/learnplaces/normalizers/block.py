from learnplaces.domain.block_types import ACCORDION, ILIAS_LINK
from learnplaces.domain.visibility import NEVER


def normalize_block(block, admin=False):
    base = {
        "id": block.id,
        "type": block.type,
        "sequence": block.sequence,
        "visibility": block.visibility,
        "content": block.content or {},
        "media_url": block.media_url
    }

    if block.type == ILIAS_LINK:
        base["ref_id"] = block.link.ref_id if block.link is not None else None

    if block.type == ACCORDION:
        base["blocks"] = [
            normalize_block(child, admin=admin)
            for child in block.children
            if admin or child.visibility != NEVER
        ]

    if admin:
        base["accordion_id"] = block.accordion_id
        base["created_at"] = block.created_at.isoformat() if block.created_at else None
        base["updated_at"] = block.updated_at.isoformat() if block.updated_at else None

    return base
