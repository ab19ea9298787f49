from ..block_types import ACCORDION, MAP, MEDIA_TYPES, NESTABLE_TYPES
from ..exceptions import InvariantViolation, ValidationError


def assert_block_sequence(blocks):
    sequences = [block.sequence for block in blocks]
    if not sequences:
        return

    expected = list(range(1, len(sequences) + 1))
    if sorted(sequences) != expected:
        raise InvariantViolation(
            f"Block sequences are not consecutive starting from 1: {sequences}"
        )


def assert_block_media(block):
    if block.type in MEDIA_TYPES:
        if not block.media_url:
            raise InvariantViolation(
                f"{block.type} block must have media_url set."
            )
    else:
        if block.media_url:
            raise InvariantViolation(
                f"{block.type} block should not have media_url set."
            )


def assert_block_placement(learnplace, block, accordion=None):
    """
    Structural rules for placing ``block`` into ``learnplace`` or into one of
    its accordions. ``block`` may already be part of the learnplace (move).
    """
    if accordion is not None:
        if accordion.type != ACCORDION:
            raise ValidationError(
                f"Block {accordion.id} is not an accordion",
                fields={"accordion": "not an accordion"},
            )
        if block.type not in NESTABLE_TYPES:
            raise ValidationError(
                f"{block.type} block cannot be placed inside an accordion",
                fields={"accordion": "not allowed for this block type"},
            )

    if block.type == MAP:
        others = [
            b for b in learnplace.all_blocks
            if b.type == MAP and b is not block
        ]
        if others:
            raise ValidationError(
                "A learnplace can only hold one map block",
                fields={"type": "map already present"},
            )
