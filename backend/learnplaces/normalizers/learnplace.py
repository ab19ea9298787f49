from .block import normalize_block
from learnplaces.domain.visibility import NEVER


def normalize_configuration(configuration):
    if configuration is None:
        return None
    return {
        "online": configuration.online,
        "default_visibility": configuration.default_visibility,
        "map_zoom_level": configuration.map_zoom_level,
    }


def normalize_location(location):
    if location is None:
        return None
    return {
        "latitude": location.latitude,
        "longitude": location.longitude,
        "elevation": location.elevation,
        "radius": location.radius,
    }


def normalize_learnplace(learnplace, admin=False):
    """
    Learnplace with its top level blocks in display order.
    Readers never see blocks hidden with NEVER visibility.
    """
    blocks = [
        b for b in learnplace.blocks
        if admin or b.visibility != NEVER
    ]

    return {
        "id": learnplace.id,
        "object_id": learnplace.object_id,
        "title": learnplace.title,
        "description": learnplace.description,
        "has_map": learnplace.has_map,
        "configuration": normalize_configuration(learnplace.configuration),
        "location": normalize_location(learnplace.location),
        "blocks": [normalize_block(b, admin=admin) for b in blocks],
    }
