from storefront.db.models import Media, Order, Role


def test_processed_order_list_only_returns_orders_handled_by_the_staff(client, seed, operator_headers):
    staff = seed.user(role=Role.OPERATOR)
    other = seed.user(role=Role.OPERATOR)
    customer = seed.user()
    address = seed.address(customer)
    _, variants = seed.product(variants=1)
    mine, _ = seed.order(customer, address, [(variants[0], 1)])
    theirs, _ = seed.order(customer, address, [(variants[0], 2)])
    with seed.database.session() as session:
        session.get(Order, mine.id).process_by_staff_id = staff.id
        session.get(Order, theirs.id).process_by_staff_id = other.id
        session.commit()

    response = client.get(f"/user/{staff.id}/processed-order-list", headers=operator_headers)

    assert response.status_code == 200
    assert [order["id"] for order in response.json()["data"]] == [mine.id]


def test_staff_lists_are_closed_to_customers(client, seed, user_headers):
    staff = seed.user(role=Role.OPERATOR)

    for path in ("processed-order-list", "created-voucher-list", "product-list", "shop-office"):
        assert client.get(f"/user/{staff.id}/{path}", headers=user_headers).status_code == 403


def test_staff_list_of_unknown_user_is_not_found(client, admin_headers):
    response = client.get("/user/999/category-list", headers=admin_headers)

    assert response.status_code == 404
    assert response.json()["message"] == "User not found!"


def test_shop_office_of_staff(client, seed, admin_headers):
    shop = seed.shop(ghn_shop_id=885)
    staff = seed.user(role=Role.OPERATOR, shop_office_id=shop.id)
    loner = seed.user(role=Role.OPERATOR)

    data = client.get(f"/user/{staff.id}/shop-office", headers=admin_headers).json()["data"]
    assert data["id"] == shop.id
    assert data["ghnShopId"] == 885

    missing = client.get(f"/user/{loner.id}/shop-office", headers=admin_headers)
    assert missing.status_code == 404
    assert missing.json()["message"] == "Shop office not found!"


def test_avatar_is_public_and_uses_the_latest_upload(client, seed):
    user = seed.user()
    seed.add(Media(url=f"avatars/{user.id}-old.jpg", user_id=user.id, is_avatar_file=True))
    latest = seed.add(Media(url=f"avatars/{user.id}-new.jpg", user_id=user.id, is_avatar_file=True))
    seed.add(Media(url=f"avatars/{user.id}-other.jpg", user_id=user.id))

    response = client.get(f"/user/{user.id}/avatar")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["id"] == latest.id
    assert data["url"] == f"https://media-bucket.s3.ap-southeast-1.amazonaws.com/avatars/{user.id}-new.jpg"


def test_missing_avatar_is_not_found(client, seed):
    user = seed.user()

    response = client.get(f"/user/{user.id}/avatar")

    assert response.status_code == 404
    assert response.json()["message"] == "Avatar not found!"
