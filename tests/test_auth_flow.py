from datetime import timedelta

from storefront.db.models import Role, User
from storefront.security import decode_token, verify_password
from storefront.services.accounts import utcnow
from storefront.services.mail import ACTIVATION_SUBJECT, PASSWORD_SUBJECT

SIGNUP = {
    "username": "minh",
    "email": "minh@example.com",
    "password": "hunter22",
    "firstName": "Minh",
    "lastName": "Nguyen",
}


def signup(client, payload=SIGNUP):
    response = client.post("/auth/signup", json=payload)
    assert response.status_code == 201, response.text
    return response.json()["data"]


def test_signup_creates_inactive_user_and_mails_the_code(client, seed, mailer):
    data = signup(client)

    assert data["email"] == "minh@example.com"
    assert data["isActive"] is False
    assert data["role"] == "USER"
    assert "password" not in data
    assert "codeActive" not in data

    user = seed.get(User, data["id"])
    assert verify_password("hunter22", user.password)
    assert user.code_active_expire > utcnow()

    [message] = mailer.sent
    assert message["To"] == "minh@example.com"
    assert message["Subject"] == ACTIVATION_SUBJECT
    assert user.code_active in message.get_content()


def test_signup_with_taken_email_is_bad_request(client):
    signup(client)

    response = client.post("/auth/signup", json={**SIGNUP, "username": "other"})

    assert response.status_code == 400
    assert response.json()["message"] == "Email is existed: minh@example.com. Please use another email."


def test_login_needs_an_activated_account(client, seed):
    data = signup(client)
    credentials = {"username": SIGNUP["email"], "password": SIGNUP["password"]}

    assert client.post("/auth/login", json=credentials).status_code == 400

    wrong = client.post("/auth/check-code", json={"id": data["id"], "codeActive": "nope"})
    assert wrong.status_code == 400
    assert wrong.json()["message"] == "Code active is expired or invalid"

    code = seed.get(User, data["id"]).code_active
    activated = client.post("/auth/check-code", json={"id": data["id"], "codeActive": code})
    assert activated.status_code == 200
    assert activated.json()["data"]["isActive"] is True

    response = client.post("/auth/login", json=credentials)
    assert response.status_code == 200
    body = response.json()["data"]
    assert body["user"] == {"id": data["id"], "email": "minh@example.com", "name": "Minh Nguyen"}

    identity = decode_token(body["access_token"], "test-secret")
    assert identity.user_id == data["id"]
    assert identity.username == "minh@example.com"
    assert identity.role == "USER"


def test_login_with_wrong_password_is_unauthorized(client, seed):
    user = seed.user(password="right-password")

    response = client.post("/auth/login", json={"username": user.email, "password": "wrong-password"})

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid Username or Password"


def test_expired_activation_code_is_rejected(client, seed):
    data = signup(client)
    with client.app.state.db.session() as session:
        user = session.get(User, data["id"])
        user.code_active_expire = utcnow() - timedelta(minutes=1)
        code = user.code_active
        session.commit()

    response = client.post("/auth/check-code", json={"id": data["id"], "codeActive": code})

    assert response.status_code == 400


def test_retry_active_issues_a_new_code(client, seed, mailer):
    data = signup(client)
    first = seed.get(User, data["id"]).code_active

    response = client.post("/auth/retry-active", json={"email": SIGNUP["email"]})

    assert response.status_code == 200
    assert response.json()["data"] == {"id": data["id"]}
    assert seed.get(User, data["id"]).code_active != first
    assert len(mailer.sent) == 2


def test_retry_active_rejects_unknown_and_active_accounts(client, seed):
    active = seed.user()

    unknown = client.post("/auth/retry-active", json={"email": "ghost@example.com"})
    already = client.post("/auth/retry-active", json={"email": active.email})

    assert unknown.json()["message"] == "This account does not exist!"
    assert already.json()["message"] == "This account has been activated!"


def test_password_reset_flow(client, seed, mailer):
    user = seed.user(password="old-password")

    response = client.post("/auth/retry-password", json={"email": user.email})
    assert response.status_code == 200
    assert response.json()["data"] == {"id": user.id, "email": user.email}
    assert mailer.sent[-1]["Subject"] == PASSWORD_SUBJECT
    code = seed.get(User, user.id).code_active

    mismatch = client.post(
        "/auth/change-password",
        json={"email": user.email, "codeActive": code, "password": "new-password", "confirmPassword": "other-pass"},
    )
    assert mismatch.status_code == 400
    assert mismatch.json()["message"] == "Password / Confirm password does not match."

    change = {"email": user.email, "codeActive": code, "password": "new-password", "confirmPassword": "new-password"}
    assert client.post("/auth/change-password", json=change).status_code == 200

    assert client.post("/auth/login", json={"username": user.email, "password": "new-password"}).status_code == 200
    assert client.post("/auth/login", json={"username": user.email, "password": "old-password"}).status_code == 401

    # The code is single use.
    assert client.post("/auth/change-password", json=change).status_code == 400


def test_users_created_by_admin_get_a_hashed_password(client, seed, admin_headers):
    payload = {"email": "staff@example.com", "username": "staff", "password": "staffpass", "role": "OPERATOR"}

    response = client.post("/user", json=payload, headers=admin_headers)

    assert response.status_code == 201
    data = response.json()["data"]
    assert "password" not in data
    stored = seed.get(User, data["id"])
    assert stored.password != "staffpass"
    assert verify_password("staffpass", stored.password)


def test_users_cannot_change_their_own_role(client, seed):
    user = seed.user()
    headers = seed.headers(Role.USER, user=user)
    patch = {"role": "ADMIN", "isAdmin": True, "isActive": True, "points": 500, "staffCode": "S1", "lastName": "Le"}

    response = client.patch(f"/user/{user.id}", json=patch, headers=headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["lastName"] == "Le"
    assert (data["role"], data["isAdmin"], data["points"], data["staffCode"]) == ("USER", False, 0, None)

    login = client.post("/auth/login", json={"username": user.email, "password": "secret123"})
    token = login.json()["data"]["access_token"]
    headers = {"Authorization": f"Bearer {token}"}
    created = client.post("/color", json={"name": "red", "hexCode": "#ff0000"}, headers=headers)
    assert created.status_code == 403


def test_only_admins_change_account_fields(client, seed, admin_headers, operator_headers):
    user = seed.user()
    patch = {"role": "OPERATOR", "staffCode": "OP-7"}

    own = seed.headers(Role.USER, user=user)
    assert client.patch(f"/user/{user.id}/account", json=patch, headers=own).status_code == 403
    assert client.patch(f"/user/{user.id}/account", json=patch, headers=operator_headers).status_code == 403

    response = client.patch(f"/user/{user.id}/account", json=patch, headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["data"]["role"] == "OPERATOR"
    assert seed.get(User, user.id).staff_code == "OP-7"
