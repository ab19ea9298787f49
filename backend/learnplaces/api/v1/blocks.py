# learnplaces/api/v1/blocks.py
from flask import request, jsonify
from learnplaces.application.lookup import get_block, get_learnplace
from learnplaces.application.blocks.new_block import new_block
from learnplaces.application.blocks.create_block import create_block as create_block_uc
from learnplaces.application.blocks.update_block import update_block as update_block_uc
from learnplaces.application.blocks.delete_block import delete_block as delete_block_uc
from learnplaces.application.blocks.move_block import move_block as move_block_uc
from learnplaces.domain.exceptions import ValidationError
from learnplaces.forms.block import get_form
from learnplaces.utils.decorators import WRITE, permission_required
from learnplaces.utils.optimistic_lock import enforce_optimistic_lock
from . import v1_bp

POSITION_QUERY_PARAM = "position"
ACCORDION_QUERY_PARAM = "accordion"


def _submitted_data():
    # Uploads arrive as multipart form data, everything else as JSON
    return request.form if request.form else request.get_json(silent=True) or {}


def _optional_int(source, name):
    value = source.get(name)
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(
            f"'{name}' must be an integer",
            fields={name: "must be an integer"},
            values={name: value},
        ) from None


@v1_bp.route("/learnplaces/<int:learnplace_id>/blocks/new/<kind>", methods=["GET"])
@permission_required(WRITE)
def add_block(learnplace_id, kind):
    learnplace = get_learnplace(learnplace_id)

    return jsonify({
        "form": new_block(learnplace=learnplace, kind=kind),
        "position": _optional_int(request.args, POSITION_QUERY_PARAM),
        "accordion": _optional_int(request.args, ACCORDION_QUERY_PARAM),
    }), 200


@v1_bp.route("/learnplaces/<int:learnplace_id>/blocks/<kind>", methods=["POST"])
@permission_required(WRITE)
def create_block(learnplace_id, kind):
    learnplace = get_learnplace(learnplace_id)

    block, anchor = create_block_uc(
        learnplace=learnplace,
        kind=kind,
        data=_submitted_data(),
        files=request.files,
        position=_optional_int(request.args, POSITION_QUERY_PARAM),
        accordion_id=_optional_int(request.args, ACCORDION_QUERY_PARAM),
    )

    return jsonify({
        "id": block.id,
        "sequence": block.sequence,
        "anchor": anchor,
        "message": "Changes saved successfully"
    }), 201


@v1_bp.route("/learnplaces/<int:learnplace_id>/blocks/<int:block_id>", methods=["GET"])
@permission_required(WRITE)
def edit_block(learnplace_id, block_id):
    learnplace = get_learnplace(learnplace_id)
    block = get_block(learnplace, block_id)

    return jsonify({"form": get_form(block.type, block).fill()}), 200


@v1_bp.route("/learnplaces/<int:learnplace_id>/blocks/<int:block_id>", methods=["PUT"])
@permission_required(WRITE)
def update_block(learnplace_id, block_id):
    learnplace = get_learnplace(learnplace_id)
    block = get_block(learnplace, block_id)

    # -----------------------
    # Optimistic Locking Check
    # -----------------------
    enforce_optimistic_lock(block)

    block, anchor = update_block_uc(
        learnplace=learnplace,
        block_id=block.id,
        data=_submitted_data(),
        files=request.files,
    )

    return jsonify({
        "id": block.id,
        "anchor": anchor,
        "message": "Changes saved successfully"
    }), 200


@v1_bp.route("/learnplaces/<int:learnplace_id>/blocks/<int:block_id>", methods=["DELETE"])
@permission_required(WRITE)
def delete_block(learnplace_id, block_id):
    learnplace = get_learnplace(learnplace_id)

    delete_block_uc(learnplace=learnplace, block_id=block_id)

    return jsonify({"message": "Block deleted and sequence regenerated"}), 200


@v1_bp.route("/learnplaces/<int:learnplace_id>/blocks/<int:block_id>/move", methods=["POST"])
@permission_required(WRITE)
def move_block(learnplace_id, block_id):
    learnplace = get_learnplace(learnplace_id)
    data = request.get_json(silent=True) or {}
    if not isinstance(data, dict):
        raise ValidationError(
            "Request body must be an object",
            fields={"body": "must be an object"},
        )

    block, anchor = move_block_uc(
        learnplace=learnplace,
        block_id=block_id,
        position=_optional_int(data, POSITION_QUERY_PARAM),
        accordion_id=_optional_int(data, ACCORDION_QUERY_PARAM),
    )

    return jsonify({
        "id": block.id,
        "sequence": block.sequence,
        "anchor": anchor,
        "message": "Block moved and sequence regenerated"
    }), 200
