from flask import current_app
from learnplaces.extensions import db
from learnplaces.models.learnplace import Learnplace
from learnplaces.utils.audit import log_action
from learnplaces.utils.media import delete_file
from learnplaces.utils.transaction import transactional


def delete_learnplace(
    *,
    learnplace: Learnplace,
) -> None:
    """
    Hard-delete a learnplace and everything it owns.

    Notes:
    - Accordion children → blocks → learnplace (bottom-up)
    - Uploaded files are removed once the rows are gone
    """
    learnplace_id = learnplace.id
    media_urls = [b.media_url for b in learnplace.all_blocks if b.media_url]

    with transactional():
        for block in [b for b in learnplace.all_blocks if b.accordion_id is not None]:
            learnplace.all_blocks.remove(block)
        db.session.flush()

        db.session.delete(learnplace)

        log_action(
            action="learnplace.delete",
            entity_type="learnplace",
            entity_id=learnplace_id,
            payload={
                "object_id": learnplace.object_id,
            },
        )

    for url in media_urls:
        delete_file(url)

    current_app.logger.info("Deleted learnplace %s", learnplace_id)
