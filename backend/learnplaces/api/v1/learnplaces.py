# learnplaces/api/v1/learnplaces.py
from flask import request, jsonify
from learnplaces.application.lookup import get_learnplace
from learnplaces.application.learnplaces.create_learnplace import create_learnplace as create_learnplace_uc
from learnplaces.application.learnplaces.update_learnplace import update_learnplace as update_learnplace_uc
from learnplaces.application.learnplaces.delete_learnplace import delete_learnplace as delete_learnplace_uc
from learnplaces.normalizers.learnplace import normalize_learnplace
from learnplaces.utils.decorators import READ, WRITE, has_permission, permission_required
from learnplaces.utils.optimistic_lock import enforce_optimistic_lock
from . import v1_bp


@v1_bp.route("/learnplaces", methods=["POST"])
@permission_required(WRITE)
def create_learnplace():
    data = request.get_json(silent=True) or {}

    learnplace = create_learnplace_uc(data=data)

    return jsonify({
        "id": learnplace.id,
        "message": "Learnplace created successfully"
    }), 201


@v1_bp.route("/learnplaces/<int:learnplace_id>", methods=["GET"])
@permission_required(READ)
def get_learnplace_view(learnplace_id):
    learnplace = get_learnplace(learnplace_id)

    # Editors see hidden blocks and bookkeeping fields
    admin = has_permission(WRITE, learnplace_id)

    return jsonify(normalize_learnplace(learnplace, admin=admin))


@v1_bp.route("/learnplaces/<int:learnplace_id>", methods=["PUT"])
@permission_required(WRITE)
def update_learnplace(learnplace_id):
    learnplace = get_learnplace(learnplace_id)

    # -----------------------
    # Optimistic Locking Check
    # -----------------------
    enforce_optimistic_lock(learnplace)

    data = request.get_json(silent=True) or {}
    update_learnplace_uc(learnplace=learnplace, data=data)

    return jsonify({"message": "Learnplace updated successfully"}), 200


@v1_bp.route("/learnplaces/<int:learnplace_id>", methods=["DELETE"])
@permission_required(WRITE)
def delete_learnplace(learnplace_id):
    learnplace = get_learnplace(learnplace_id)

    delete_learnplace_uc(learnplace=learnplace)

    return jsonify({"message": "Learnplace deleted successfully"}), 200
