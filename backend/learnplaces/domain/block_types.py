from typing import Set

RICH_TEXT = "rich_text"
PICTURE = "picture"
VIDEO = "video"
ILIAS_LINK = "ilias_link"
MAP = "map"
ACCORDION = "accordion"

BLOCK_TYPES: Set[str] = {RICH_TEXT, PICTURE, VIDEO, ILIAS_LINK, MAP, ACCORDION}

# Kinds that carry an uploaded file in Block.media_url
MEDIA_TYPES: Set[str] = {PICTURE, VIDEO}

# Kinds an accordion may hold
NESTABLE_TYPES: Set[str] = {RICH_TEXT, PICTURE, VIDEO, ILIAS_LINK}
