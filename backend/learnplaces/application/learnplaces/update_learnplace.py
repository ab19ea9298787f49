from typing import Any, Dict
from learnplaces.domain.exceptions import ValidationError
from learnplaces.forms.learnplace import get_learnplace_data
from learnplaces.models.learnplace import Configuration, Learnplace, Location
from learnplaces.utils.audit import log_action
from learnplaces.utils.transaction import transactional


ALLOWED_UPDATE_FIELDS = {"title", "description"}


def _apply(entity, values: Dict[str, Any], prefix: str, changed_fields: list) -> None:
    for field, value in values.items():
        if getattr(entity, field) != value:
            setattr(entity, field, value)
            changed_fields.append(f"{prefix}{field}")


def update_learnplace(
    *,
    learnplace: Learnplace,
    data: Dict[str, Any],
) -> Learnplace:
    """
    Update mutable fields on a learnplace, its configuration and location.

    Design rules:
    - Only whitelisted fields are mutable
    - No silent no-op updates
    """
    cleaned = get_learnplace_data(data, creating=False)

    changed_fields: list[str] = []

    with transactional():
        _apply(
            learnplace,
            {k: v for k, v in cleaned.items() if k in ALLOWED_UPDATE_FIELDS},
            "",
            changed_fields,
        )

        if cleaned.get("configuration"):
            if learnplace.configuration is None:
                learnplace.configuration = Configuration()
            _apply(learnplace.configuration, cleaned["configuration"], "configuration.", changed_fields)

        if cleaned.get("location"):
            if learnplace.location is None:
                learnplace.location = Location()
            _apply(learnplace.location, cleaned["location"], "location.", changed_fields)

        if not changed_fields:
            # Explicitly fail instead of silently succeeding
            raise ValidationError("No valid fields provided for update", values=data)

        log_action(
            action="learnplace.update",
            entity_type="learnplace",
            entity_id=learnplace.id,
            payload={
                "fields": changed_fields,
            },
        )

    return learnplace
