""" Tests for the block endpoints """
import io
import os

import pytest

from learnplaces.models.block import Block
from learnplaces.models.ilias_link_block import ILIASLinkBlock


def get_learnplace(client, learnplace, headers):
    response = client.get(f"/api/v1/learnplaces/{learnplace.id}", headers=headers)
    assert response.status_code == 200
    return response.get_json()


def block_ids(data):
    return [block["id"] for block in data["blocks"]]


def block_sequences(data):
    return [block["sequence"] for block in data["blocks"]]


def test_add_prefills_default_visibility(client, editor_headers, learnplace):
    response = client.get(
        f"/api/v1/learnplaces/{learnplace.id}/blocks/new/rich_text",
        query_string={"position": 2},
        headers=editor_headers,
    )

    assert response.status_code == 200
    data = response.get_json()
    assert data["form"] == {
        "id": 0,
        "type": "rich_text",
        "visibility": "ONLY_AT_PLACE",
        "sequence": 0,
        "text": "",
    }
    assert data["position"] == 2


def test_add_unknown_kind(client, editor_headers, learnplace):
    response = client.get(
        f"/api/v1/learnplaces/{learnplace.id}/blocks/new/carousel",
        headers=editor_headers,
    )

    assert response.status_code == 404


def test_create_appends_by_default(client, editor_headers, learnplace, create_block):
    first = create_block("rich_text", {"text": "one"})
    second = create_block("rich_text", {"text": "two"})

    assert first["sequence"] == 1
    assert second["sequence"] == 2
    assert second["anchor"] == "block_2"

    data = get_learnplace(client, learnplace, editor_headers)
    assert block_ids(data) == [first["id"], second["id"]]
    assert data["blocks"][0]["visibility"] == "ONLY_AT_PLACE"


def test_create_stores_block(client, editor_headers, learnplace, create_block, db):
    assert Block.query.count() == 0

    created = create_block("rich_text", {"text": "one"})

    assert created["id"] is not None
    assert Block.query.count() == 1
    block = db.session.get(Block, created["id"])
    assert block.learnplace_id == learnplace.id
    assert block.sequence == 1
    assert block.content == {"text": "one"}


def test_create_inserts_at_position(client, editor_headers, learnplace, create_block):
    a = create_block("rich_text", {"text": "a"})
    b = create_block("rich_text", {"text": "b"})
    c = create_block("rich_text", {"text": "c"})

    new = create_block("rich_text", {"text": "new"}, position=1)

    data = get_learnplace(client, learnplace, editor_headers)
    assert block_ids(data) == [a["id"], new["id"], b["id"], c["id"]]
    assert block_sequences(data) == [1, 2, 3, 4]


def test_create_clamps_position(client, editor_headers, learnplace, create_block):
    a = create_block("rich_text", {"text": "a"})
    new = create_block("rich_text", {"text": "new"}, position=50)

    data = get_learnplace(client, learnplace, editor_headers)
    assert block_ids(data) == [a["id"], new["id"]]


def test_create_ignores_submitted_id(client, editor_headers, learnplace, create_block):
    a = create_block("rich_text", {"text": "a"})

    b = create_block("rich_text", {"id": a["id"], "text": "b"})

    assert b["id"] != a["id"]
    data = get_learnplace(client, learnplace, editor_headers)
    assert len(data["blocks"]) == 2


def test_create_validation_error_echoes_values(client, editor_headers, learnplace, create_block):
    data = create_block("rich_text", {"text": "", "visibility": "NEVER"}, expect=400)

    assert data["error"] == "ValidationError"
    assert data["fields"] == {"text": "required"}
    assert data["values"] == {"text": "", "visibility": "NEVER"}
    assert get_learnplace(client, learnplace, editor_headers)["blocks"] == []


def test_create_rejects_non_object_body(client, editor_headers, learnplace):
    response = client.post(
        f"/api/v1/learnplaces/{learnplace.id}/blocks/rich_text",
        json="hello",
        headers=editor_headers,
    )

    assert response.status_code == 400
    data = response.get_json()
    assert data["error"] == "ValidationError"
    assert data["message"] == "Request body must be an object"
    assert Block.query.count() == 0


def test_create_requires_write_permission(client, reader_headers, learnplace):
    response = client.post(
        f"/api/v1/learnplaces/{learnplace.id}/blocks/rich_text",
        json={"text": "nope"},
        headers=reader_headers,
    )

    assert response.status_code == 403
    assert response.get_json()["error"] == "AccessDenied"


def test_create_requires_token(client, learnplace):
    response = client.post(
        f"/api/v1/learnplaces/{learnplace.id}/blocks/rich_text",
        json={"text": "nope"},
    )

    assert response.status_code == 401


def test_create_in_unknown_learnplace(client, editor_headers):
    response = client.post(
        "/api/v1/learnplaces/999/blocks/rich_text",
        json={"text": "x"},
        headers=editor_headers,
    )

    assert response.status_code == 404


def test_ilias_link_block_creates_link_row(client, editor_headers, learnplace, create_block, db):
    created = create_block("ilias_link", {"ref_id": 77})

    link = ILIASLinkBlock.query.filter_by(fk_block_id=created["id"]).one()
    assert link.ref_id == 77

    data = get_learnplace(client, learnplace, editor_headers)
    assert data["blocks"][0]["ref_id"] == 77


def test_only_one_map(client, editor_headers, learnplace, create_block):
    create_block("map")

    data = create_block("map", expect=400)

    assert data["fields"] == {"type": "map already present"}
    assert get_learnplace(client, learnplace, editor_headers)["has_map"] is True


def test_accordion_children(client, editor_headers, learnplace, create_block):
    create_block("rich_text", {"text": "intro"})
    accordion = create_block("accordion", {"title": "Details"})

    first = create_block("rich_text", {"text": "inside"}, accordion=accordion["id"])
    second = create_block("rich_text", {"text": "first inside"}, accordion=accordion["id"], position=0)

    assert first["anchor"] == "block_2"

    data = get_learnplace(client, learnplace, editor_headers)
    assert len(data["blocks"]) == 2
    children = data["blocks"][1]["blocks"]
    assert [child["id"] for child in children] == [second["id"], first["id"]]
    assert [child["sequence"] for child in children] == [1, 2]


def test_accordion_cannot_be_nested(client, learnplace, create_block):
    accordion = create_block("accordion", {"title": "Outer"})

    data = create_block("accordion", {"title": "Inner"}, accordion=accordion["id"], expect=400)

    assert "accordion" in data["fields"]


def test_accordion_of_other_learnplace_is_not_found(client, editor_headers, learnplace, create_block):
    other = client.post(
        "/api/v1/learnplaces",
        json={"object_id": 7, "title": "Other"},
        headers=editor_headers,
    ).get_json()
    accordion = client.post(
        f"/api/v1/learnplaces/{other['id']}/blocks/accordion",
        json={"title": "Foreign"},
        headers=editor_headers,
    ).get_json()

    data = create_block("rich_text", {"text": "x"}, accordion=accordion["id"], expect=404)

    assert data["error"] == "NotFoundError"


def test_edit_returns_form_values(client, editor_headers, learnplace, create_block):
    created = create_block("accordion", {"title": "Details", "expand": True, "visibility": "NEVER"})

    response = client.get(
        f"/api/v1/learnplaces/{learnplace.id}/blocks/{created['id']}",
        headers=editor_headers,
    )

    assert response.status_code == 200
    assert response.get_json()["form"] == {
        "id": created["id"],
        "type": "accordion",
        "visibility": "NEVER",
        "sequence": 1,
        "title": "Details",
        "expand": True,
    }


def test_update_keeps_sequence(client, editor_headers, learnplace, create_block):
    create_block("rich_text", {"text": "a"})
    b = create_block("rich_text", {"text": "b"})

    response = client.put(
        f"/api/v1/learnplaces/{learnplace.id}/blocks/{b['id']}",
        json={"text": "changed", "sequence": 1, "visibility": "NEVER"},
        headers=editor_headers,
    )

    assert response.status_code == 200
    assert response.get_json()["anchor"] == "block_2"

    data = get_learnplace(client, learnplace, editor_headers)
    assert data["blocks"][1]["id"] == b["id"]
    assert data["blocks"][1]["sequence"] == 2
    assert data["blocks"][1]["content"] == {"text": "changed"}
    assert data["blocks"][1]["visibility"] == "NEVER"


def test_update_cannot_change_type(client, editor_headers, learnplace, create_block):
    created = create_block("rich_text", {"text": "a"})

    response = client.put(
        f"/api/v1/learnplaces/{learnplace.id}/blocks/{created['id']}",
        json={"type": "map"},
        headers=editor_headers,
    )

    assert response.status_code == 400
    assert "type" in response.get_json()["fields"]


@pytest.mark.parametrize("kind, original, submitted", [
    ("rich_text", {"text": "keep"}, {"text": ""}),
    ("accordion", {"title": "Details"}, {"title": "  "}),
])
def test_update_rejects_empty_required_field(
    client, editor_headers, learnplace, create_block, db, kind, original, submitted
):
    created = create_block(kind, original)

    response = client.put(
        f"/api/v1/learnplaces/{learnplace.id}/blocks/{created['id']}",
        json=submitted,
        headers=editor_headers,
    )

    assert response.status_code == 400
    data = response.get_json()
    assert data["fields"] == {name: "required" for name in submitted}
    assert data["values"] == submitted

    block = db.session.get(Block, created["id"])
    for name, value in original.items():
        assert block.content[name] == value


def test_update_unknown_block(client, editor_headers, learnplace):
    response = client.put(
        f"/api/v1/learnplaces/{learnplace.id}/blocks/12345",
        json={"text": "a"},
        headers=editor_headers,
    )

    assert response.status_code == 404


def test_update_conflict(client, editor_headers, learnplace, create_block):
    created = create_block("rich_text", {"text": "a"})

    response = client.put(
        f"/api/v1/learnplaces/{learnplace.id}/blocks/{created['id']}",
        json={"text": "b"},
        headers={**editor_headers, "If-Unmodified-Since": "Mon, 01 Jan 2001 00:00:00 GMT"},
    )

    assert response.status_code == 409


def test_delete_regenerates_sequence(client, editor_headers, learnplace, create_block):
    a = create_block("rich_text", {"text": "a"})
    b = create_block("rich_text", {"text": "b"})
    c = create_block("rich_text", {"text": "c"})

    response = client.delete(
        f"/api/v1/learnplaces/{learnplace.id}/blocks/{b['id']}",
        headers=editor_headers,
    )

    assert response.status_code == 200
    data = get_learnplace(client, learnplace, editor_headers)
    assert block_ids(data) == [a["id"], c["id"]]
    assert block_sequences(data) == [1, 2]


def test_delete_unknown_block_leaves_learnplace_unchanged(client, editor_headers, learnplace, create_block):
    a = create_block("rich_text", {"text": "a"})

    response = client.delete(
        f"/api/v1/learnplaces/{learnplace.id}/blocks/999",
        headers=editor_headers,
    )

    assert response.status_code == 404
    data = get_learnplace(client, learnplace, editor_headers)
    assert block_ids(data) == [a["id"]]
    assert block_sequences(data) == [1]


def test_delete_accordion_deletes_children(client, editor_headers, learnplace, create_block, db):
    accordion = create_block("accordion", {"title": "Details"})
    child = create_block("ilias_link", {"ref_id": 5}, accordion=accordion["id"])
    after = create_block("rich_text", {"text": "after"})

    response = client.delete(
        f"/api/v1/learnplaces/{learnplace.id}/blocks/{accordion['id']}",
        headers=editor_headers,
    )

    assert response.status_code == 200
    assert db.session.get(Block, child["id"]) is None
    assert ILIASLinkBlock.query.filter_by(fk_block_id=child["id"]).first() is None

    data = get_learnplace(client, learnplace, editor_headers)
    assert block_ids(data) == [after["id"]]
    assert block_sequences(data) == [1]


def test_create_then_delete_restores_order(client, editor_headers, learnplace, create_block):
    for text in ("a", "b", "c"):
        create_block("rich_text", {"text": text})
    before = [(b["id"], b["sequence"]) for b in get_learnplace(client, learnplace, editor_headers)["blocks"]]

    new = create_block("rich_text", {"text": "temp"}, position=1)
    client.delete(f"/api/v1/learnplaces/{learnplace.id}/blocks/{new['id']}", headers=editor_headers)

    after = [(b["id"], b["sequence"]) for b in get_learnplace(client, learnplace, editor_headers)["blocks"]]
    assert after == before


def test_move_within_learnplace(client, editor_headers, learnplace, create_block):
    a = create_block("rich_text", {"text": "a"})
    b = create_block("rich_text", {"text": "b"})
    c = create_block("rich_text", {"text": "c"})

    response = client.post(
        f"/api/v1/learnplaces/{learnplace.id}/blocks/{c['id']}/move",
        json={"position": 0},
        headers=editor_headers,
    )

    assert response.status_code == 200
    assert response.get_json()["sequence"] == 1
    data = get_learnplace(client, learnplace, editor_headers)
    assert block_ids(data) == [c["id"], a["id"], b["id"]]
    assert block_sequences(data) == [1, 2, 3]


def test_move_into_and_out_of_accordion(client, editor_headers, learnplace, create_block):
    a = create_block("rich_text", {"text": "a"})
    accordion = create_block("accordion", {"title": "Details"})
    b = create_block("rich_text", {"text": "b"})

    response = client.post(
        f"/api/v1/learnplaces/{learnplace.id}/blocks/{a['id']}/move",
        json={"accordion": accordion["id"]},
        headers=editor_headers,
    )
    assert response.status_code == 200

    data = get_learnplace(client, learnplace, editor_headers)
    assert block_ids(data) == [accordion["id"], b["id"]]
    assert block_sequences(data) == [1, 2]
    assert [child["id"] for child in data["blocks"][0]["blocks"]] == [a["id"]]

    response = client.post(
        f"/api/v1/learnplaces/{learnplace.id}/blocks/{a['id']}/move",
        json={"position": 2},
        headers=editor_headers,
    )
    assert response.status_code == 200

    data = get_learnplace(client, learnplace, editor_headers)
    assert block_ids(data) == [accordion["id"], b["id"], a["id"]]
    assert data["blocks"][0]["blocks"] == []


def test_move_rejects_non_object_body(client, editor_headers, learnplace, create_block):
    a = create_block("rich_text", {"text": "a"})

    response = client.post(
        f"/api/v1/learnplaces/{learnplace.id}/blocks/{a['id']}/move",
        json=[1],
        headers=editor_headers,
    )

    assert response.status_code == 400
    assert response.get_json()["error"] == "ValidationError"
    assert block_sequences(get_learnplace(client, learnplace, editor_headers)) == [1]


def test_move_accordion_into_itself(client, editor_headers, learnplace, create_block):
    accordion = create_block("accordion", {"title": "Details"})

    response = client.post(
        f"/api/v1/learnplaces/{learnplace.id}/blocks/{accordion['id']}/move",
        json={"accordion": accordion["id"]},
        headers=editor_headers,
    )

    assert response.status_code == 400


def test_picture_upload_and_delete(app, client, editor_headers, learnplace):
    response = client.post(
        f"/api/v1/learnplaces/{learnplace.id}/blocks/picture",
        data={
            "title": "Fountain",
            "visibility": "ALWAYS",
            "file": (io.BytesIO(b"\x89PNG"), "fountain.png"),
        },
        content_type="multipart/form-data",
        headers=editor_headers,
    )
    assert response.status_code == 201, response.get_json()
    block_id = response.get_json()["id"]

    data = get_learnplace(client, learnplace, editor_headers)
    media_url = data["blocks"][0]["media_url"]
    stored = os.path.join(app.config["UPLOAD_FOLDER"], os.path.basename(media_url))
    assert media_url.endswith(".png")
    assert os.path.exists(stored)

    client.delete(f"/api/v1/learnplaces/{learnplace.id}/blocks/{block_id}", headers=editor_headers)
    assert not os.path.exists(stored)


def test_picture_rejects_wrong_file_type(client, editor_headers, learnplace):
    response = client.post(
        f"/api/v1/learnplaces/{learnplace.id}/blocks/picture",
        data={"file": (io.BytesIO(b"MZ"), "virus.exe")},
        content_type="multipart/form-data",
        headers=editor_headers,
    )

    assert response.status_code == 400
    assert "file" in response.get_json()["fields"]


@pytest.mark.parametrize("kind", ["picture", "video"])
def test_media_blocks_require_file(kind, learnplace, create_block):
    data = create_block(kind, {"visibility": "ALWAYS"}, expect=400)

    assert data["fields"] == {"file": "required"}
