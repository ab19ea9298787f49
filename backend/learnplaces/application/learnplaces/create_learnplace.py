from typing import Any, Dict
from flask import current_app
from sqlalchemy.exc import IntegrityError
from learnplaces.domain.exceptions import ValidationError
from learnplaces.extensions import db
from learnplaces.forms.learnplace import get_learnplace_data
from learnplaces.models.learnplace import Configuration, Learnplace, Location
from learnplaces.utils.audit import log_action
from learnplaces.utils.transaction import transactional


def create_learnplace(
    *,
    data: Dict[str, Any],
) -> Learnplace:
    """
    Create a learnplace for a host repository object.

    Edge cases handled:
    - Missing required fields
    - Duplicate host object id
    - Configuration and location fall back to their defaults
    """
    cleaned = get_learnplace_data(data, creating=True)

    existing = Learnplace.query.filter_by(object_id=cleaned["object_id"]).first()
    if existing:
        raise ValidationError(
            "A learnplace for this object already exists",
            fields={"object_id": "already in use"},
            values=data,
        )

    learnplace = Learnplace()
    learnplace.object_id = cleaned["object_id"]
    learnplace.title = cleaned["title"]
    learnplace.description = cleaned.get("description")

    configuration = Configuration()
    for field, value in cleaned.get("configuration", {}).items():
        setattr(configuration, field, value)
    learnplace.configuration = configuration

    location = Location()
    for field, value in cleaned.get("location", {}).items():
        setattr(location, field, value)
    learnplace.location = location

    try:
        with transactional():
            db.session.add(learnplace)
            db.session.flush()  # ensures learnplace.id is available

            log_action(
                action="learnplace.create",
                entity_type="learnplace",
                entity_id=learnplace.id,
                payload={
                    "object_id": learnplace.object_id,
                    "title": learnplace.title,
                },
            )

    except IntegrityError as exc:
        # Lost a race on the unique object id
        raise ValidationError(
            "A learnplace for this object already exists",
            fields={"object_id": "already in use"},
            values=data,
        ) from exc

    current_app.logger.info(
        "Created learnplace %s for object %s", learnplace.id, learnplace.object_id
    )
    return learnplace
