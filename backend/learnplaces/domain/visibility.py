from typing import Set

ALWAYS = "ALWAYS"
NEVER = "NEVER"
ONLY_AT_PLACE = "ONLY_AT_PLACE"
AFTER_VISIT_PLACE = "AFTER_VISIT_PLACE"

VISIBILITIES: Set[str] = {ALWAYS, NEVER, ONLY_AT_PLACE, AFTER_VISIT_PLACE}

DEFAULT_VISIBILITY = ALWAYS


def is_visibility(value) -> bool:
    return value in VISIBILITIES
