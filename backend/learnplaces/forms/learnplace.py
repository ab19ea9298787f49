from typing import Any, Dict

from learnplaces.domain.exceptions import ValidationError
from learnplaces.domain.visibility import VISIBILITIES, is_visibility

TITLE_MAX_LENGTH = 200

MIN_ZOOM_LEVEL = 0
MAX_ZOOM_LEVEL = 18

# field -> (lower bound, upper bound), None means unbounded
LOCATION_FIELDS = {
    "latitude": (-90.0, 90.0),
    "longitude": (-180.0, 180.0),
    "elevation": (None, None),
}


def _to_number(value, cast, errors, name):
    if isinstance(value, bool):
        errors[name] = "must be a number"
        return None
    try:
        return cast(value)
    except (TypeError, ValueError):
        errors[name] = "must be a number"
        return None


def _clean_configuration(raw, errors) -> Dict[str, Any]:
    cleaned: Dict[str, Any] = {}
    if not isinstance(raw, dict):
        errors["configuration"] = "must be an object"
        return cleaned

    if "online" in raw:
        if not isinstance(raw["online"], bool):
            errors["configuration.online"] = "must be a boolean"
        else:
            cleaned["online"] = raw["online"]

    if "default_visibility" in raw:
        if not is_visibility(raw["default_visibility"]):
            errors["configuration.default_visibility"] = (
                f"must be one of {', '.join(sorted(VISIBILITIES))}"
            )
        else:
            cleaned["default_visibility"] = raw["default_visibility"]

    if "map_zoom_level" in raw:
        zoom = _to_number(raw["map_zoom_level"], int, errors, "configuration.map_zoom_level")
        if zoom is not None and not MIN_ZOOM_LEVEL <= zoom <= MAX_ZOOM_LEVEL:
            errors["configuration.map_zoom_level"] = (
                f"must be between {MIN_ZOOM_LEVEL} and {MAX_ZOOM_LEVEL}"
            )
        elif zoom is not None:
            cleaned["map_zoom_level"] = zoom

    return cleaned


def _clean_location(raw, errors) -> Dict[str, Any]:
    cleaned: Dict[str, Any] = {}
    if not isinstance(raw, dict):
        errors["location"] = "must be an object"
        return cleaned

    for name, (low, high) in LOCATION_FIELDS.items():
        if name not in raw:
            continue
        key = f"location.{name}"
        value = _to_number(raw[name], float, errors, key)
        if value is None:
            continue
        if (low is not None and value < low) or (high is not None and value > high):
            errors[key] = f"must be between {low} and {high}"
            continue
        cleaned[name] = value

    if "radius" in raw:
        radius = _to_number(raw["radius"], int, errors, "location.radius")
        if radius is not None and radius <= 0:
            errors["location.radius"] = "must be positive"
        elif radius is not None:
            cleaned["radius"] = radius

    return cleaned


def get_learnplace_data(data, *, creating=True) -> Dict[str, Any]:
    """
    Validate submitted learnplace data.

    Returns a dict with the top level fields plus optional ``configuration``
    and ``location`` sub dicts. The host object id can only be set on create.
    """
    data = data if isinstance(data, dict) else {}
    errors: Dict[str, str] = {}
    cleaned: Dict[str, Any] = {}

    if creating:
        object_id = data.get("object_id")
        if object_id is None:
            errors["object_id"] = "required"
        else:
            object_id = _to_number(object_id, int, errors, "object_id")
            if object_id is not None and object_id <= 0:
                errors["object_id"] = "must be positive"
            elif object_id is not None:
                cleaned["object_id"] = object_id
    elif "object_id" in data:
        errors["object_id"] = "cannot be changed"

    title = data.get("title")
    if title is None:
        if creating:
            errors["title"] = "required"
    elif not isinstance(title, str) or not title.strip():
        errors["title"] = "must be a non-empty string"
    elif len(title.strip()) > TITLE_MAX_LENGTH:
        errors["title"] = f"must be at most {TITLE_MAX_LENGTH} characters"
    else:
        cleaned["title"] = title.strip()

    if "description" in data:
        description = data["description"]
        if description is not None and not isinstance(description, str):
            errors["description"] = "must be a string"
        else:
            cleaned["description"] = description

    if "configuration" in data:
        cleaned["configuration"] = _clean_configuration(data["configuration"], errors)

    if "location" in data:
        cleaned["location"] = _clean_location(data["location"], errors)

    if errors:
        raise ValidationError("Invalid learnplace data", fields=errors, values=data)

    return cleaned
