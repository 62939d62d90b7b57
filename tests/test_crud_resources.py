import pytest

from storefront.db.models import Color
from storefront.errors import BadRequestError, NotFoundError
from storefront.schemas.catalog import ColorCreate, ColorUpdate
from storefront.services.crud import CrudService
from storefront.services.resources import COLOR


def create_color(client, headers, name, hex_code="#A1B2C3"):
    response = client.post("/color", json={"name": name, "hexCode": hex_code}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


def test_create_returns_envelope_with_generated_fields(client, admin_headers):
    response = client.post("/color", json={"name": "navy", "hexCode": "#000080"}, headers=admin_headers)

    assert response.status_code == 201
    body = response.json()
    assert body["statusCode"] == 201
    assert body["message"] == "Create color"
    data = body["data"]
    assert data["name"] == "navy"
    assert data["hexCode"] == "#000080"
    assert isinstance(data["id"], int)
    assert data["createdAt"] and data["updatedAt"]

    fetched = client.get(f"/color/{data['id']}").json()
    assert fetched["message"] == "Fetch color by id"
    assert fetched["data"] == data


def test_find_all_is_empty_without_rows(client):
    response = client.get("/color")

    assert response.status_code == 200
    assert response.json()["data"] == []


def test_pages_cover_every_row_once_in_id_order(client, admin_headers):
    ids = [create_color(client, admin_headers, f"c{i}")["id"] for i in range(5)]

    seen = []
    for page in (1, 2, 3, 4):
        rows = client.get("/color", params={"page": page, "perPage": 2}).json()["data"]
        assert len(rows) <= 2
        seen.extend(row["id"] for row in rows)

    assert seen == sorted(ids)


@pytest.mark.parametrize("params", [{"page": 0}, {"perPage": 0}, {"perPage": 101}])
def test_out_of_range_pagination_is_bad_request(client, params):
    response = client.get("/color", params=params)

    assert response.status_code == 400
    body = response.json()
    assert body["statusCode"] == 400
    assert body["error"] == "Bad Request"
    assert isinstance(body["message"], list)


def test_missing_id_is_not_found_for_read_update_and_delete(client, admin_headers):
    for method, kwargs in (
        ("GET", {}),
        ("PATCH", {"json": {"name": "ghost"}}),
        ("DELETE", {}),
    ):
        response = client.request(method, "/color/999", headers=admin_headers, **kwargs)
        assert response.status_code == 404, method
        assert response.json() == {"statusCode": 404, "message": "Color not found!", "error": "Not Found"}


def test_partial_update_keeps_unspecified_fields(client, admin_headers):
    color = create_color(client, admin_headers, "teal", "#008080")

    response = client.patch(f"/color/{color['id']}", json={"name": "dark teal"}, headers=admin_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["name"] == "dark teal"
    assert data["hexCode"] == "#008080"


def test_remove_returns_deleted_record(client, admin_headers):
    color = create_color(client, admin_headers, "olive", "#808000")

    response = client.delete(f"/color/{color['id']}", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["data"]["name"] == "olive"
    assert client.get(f"/color/{color['id']}").status_code == 404


def test_constraint_violation_is_bad_request_without_database_details(client, admin_headers):
    create_color(client, admin_headers, "red", "#FF0000")

    response = client.post("/color", json={"name": "red", "hexCode": "#FF0000"}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["message"] == "Failed to create color"


def test_invalid_body_lists_validation_messages(client, admin_headers):
    response = client.post("/color", json={"name": "bad", "hexCode": "red"}, headers=admin_headers)

    assert response.status_code == 400
    messages = response.json()["message"]
    assert any("hexCode" in message for message in messages)


def test_snake_case_body_is_accepted(client, admin_headers):
    response = client.post("/color", json={"name": "plum", "hex_code": "#DDA0DD"}, headers=admin_headers)

    assert response.status_code == 201
    assert response.json()["data"]["hexCode"] == "#DDA0DD"


def test_service_level_operations(client, seed):
    with client.app.state.db.session() as session:
        service = CrudService(session, COLOR)

        created = service.create(ColorCreate(name="amber", hex_code="#FFBF00"))
        assert service.find_one(created.id).name == "amber"

        updated = service.update(created.id, ColorUpdate(hex_code="#FFC000"))
        assert updated.name == "amber"
        assert updated.hex_code == "#FFC000"

        service.remove(created.id)
        with pytest.raises(NotFoundError):
            service.find_one(created.id)
        with pytest.raises(BadRequestError):
            service.find_all(page=1, per_page=500)

    assert seed.count(Color) == 0
