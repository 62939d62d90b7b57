import pytest

from storefront.api.deps import authorize
from storefront.db.models import Role
from storefront.errors import ForbiddenError
from storefront.security import Identity

COLOR = {"name": "sand", "hexCode": "#C2B280"}


def test_protected_route_without_token_is_unauthorized(client):
    response = client.post("/color", json=COLOR)

    assert response.status_code == 401
    assert response.json() == {"statusCode": 401, "message": "Unauthorized", "error": "Unauthorized"}


def test_admin_route_rejects_user_and_accepts_admin(client, user_headers, admin_headers):
    rejected = client.post("/color", json=COLOR, headers=user_headers)
    accepted = client.post("/color", json=COLOR, headers=admin_headers)

    assert rejected.status_code == 403
    assert rejected.json()["message"] == "You do not have permission to access this resource."
    assert accepted.status_code == 201


def test_roles_are_matched_exactly(client, operator_headers):
    # OPERATOR is not implied by ADMIN-only routes.
    assert client.post("/color", json=COLOR, headers=operator_headers).status_code == 403


def test_tampered_token_is_unauthorized(client, seed):
    token = seed.token(seed.user()) + "x"

    response = client.get("/auth/profile", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid token"


def test_expired_token_is_unauthorized(client, seed):
    token = seed.token(seed.user(), expires_in=-60)

    response = client.get("/auth/profile", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json()["message"] == "Token has expired"


def test_public_route_needs_no_token(client):
    response = client.get("/products")

    assert response.status_code == 200
    assert response.json() == {"statusCode": 200, "message": "Fetch all products", "data": []}


def test_public_route_ignores_a_bad_token(client):
    response = client.get("/products", headers={"Authorization": "Bearer not-a-token"})

    assert response.status_code == 200


def test_route_without_roles_admits_any_authenticated_caller(client, user_headers):
    assert client.get("/orders", headers=user_headers).status_code == 200
    assert client.get("/orders").status_code == 401


def test_user_listing_is_staff_only(client, user_headers, operator_headers):
    assert client.get("/user", headers=user_headers).status_code == 403
    assert client.get("/user", headers=operator_headers).status_code == 200


def test_shipment_reads_admit_customers_but_writes_do_not(client, user_headers):
    assert client.get("/shipments/1", headers=user_headers).status_code == 404
    assert client.delete("/shipments/1", headers=user_headers).status_code == 403


def test_profile_returns_token_identity(client, seed):
    user = seed.user(role=Role.OPERATOR, first_name="Lan", last_name="Tran")

    response = client.get("/auth/profile", headers={"Authorization": f"Bearer {seed.token(user)}"})

    assert response.status_code == 200
    assert response.json()["data"] == {
        "userId": user.id,
        "username": user.email,
        "role": "OPERATOR",
        "isAdmin": False,
        "firstName": "Lan",
        "lastName": "Tran",
    }


def test_authorize_without_roles_admits_everyone():
    authorize(None, None)
    authorize(Identity(user_id=1, username="a@example.com", role="USER"), ())


def test_authorize_with_roles_needs_an_identity():
    with pytest.raises(ForbiddenError):
        authorize(None, (Role.ADMIN,))
