from typing import Any, Dict

from learnplaces.domain.visibility import DEFAULT_VISIBILITY
from learnplaces.forms.block import get_form
from learnplaces.models.block import Block
from learnplaces.models.learnplace import Learnplace


def default_visibility(learnplace: Learnplace) -> str:
    if learnplace.configuration is None:
        return DEFAULT_VISIBILITY
    return learnplace.configuration.default_visibility


def new_block(*, learnplace: Learnplace, kind: str) -> Dict[str, Any]:
    """
    Form values for a block that is about to be added.
    Nothing is persisted.
    """
    block = Block(type=kind, sequence=0, content={})
    block.visibility = default_visibility(learnplace)
    return get_form(kind, block).fill()
