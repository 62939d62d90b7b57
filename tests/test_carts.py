from storefront.db.models import Cart, CartItem, Role


def test_adding_items_creates_the_cart_and_merges_quantities(client, seed):
    user = seed.user()
    headers = seed.headers(Role.USER, user=user)
    _, variants = seed.product(variants=1, price="120000")

    first = client.post(
        f"/user/{user.id}/cart/cart-item", json={"productVariantId": variants[0].id, "quantity": 2}, headers=headers
    )
    second = client.post(f"/user/{user.id}/cart/cart-item", json={"productVariantId": variants[0].id}, headers=headers)

    assert first.status_code == 201
    assert second.status_code == 201
    assert second.json()["data"]["quantity"] == 3
    assert seed.count(Cart) == 1
    assert seed.count(CartItem) == 1


def test_cart_details_include_variants_and_subtotal(client, seed, storage):
    user = seed.user()
    headers = seed.headers(Role.USER, user=user)
    product, cheap = seed.product(variants=1, media_per_variant=1, storage=storage, price="50000")
    _, dear = seed.product(variants=1, price="200000")
    for variant, quantity in ((cheap[0], 3), (dear[0], 1)):
        client.post(
            f"/user/{user.id}/cart/cart-item",
            json={"productVariantId": variant.id, "quantity": quantity},
            headers=headers,
        )
    cart_id = client.get(f"/user/{user.id}/cart", headers=headers).json()["data"]["id"]

    response = client.get(f"/cart/{cart_id}/cart-details", headers=headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["subTotal"] == 350000
    assert [item["productVariant"]["id"] for item in data["cartItems"]] == [cheap[0].id, dear[0].id]
    [media] = data["cartItems"][0]["productVariant"]["media"]
    assert media["url"].startswith("https://media-bucket.s3.ap-southeast-1.amazonaws.com/products/")

    shortcut = client.get(f"/user/{user.id}/cart/cart-details", headers=headers).json()["data"]
    assert shortcut["subTotal"] == 350000


def test_opening_a_cart_twice_returns_the_same_cart(client, seed):
    user = seed.user()
    headers = seed.headers(Role.USER, user=user)

    first = client.post(f"/user/{user.id}/cart", headers=headers).json()["data"]
    second = client.post(f"/user/{user.id}/cart", headers=headers).json()["data"]

    assert first["id"] == second["id"]


def test_missing_cart_and_variant_are_not_found(client, seed):
    user = seed.user()
    headers = seed.headers(Role.USER, user=user)

    assert client.get(f"/user/{user.id}/cart", headers=headers).json()["message"] == "Cart not found!"
    response = client.post(f"/user/{user.id}/cart/cart-item", json={"productVariantId": 999}, headers=headers)
    assert response.status_code == 404
    assert response.json()["message"] == "Product variant not found!"


def test_staff_cannot_use_customer_cart_routes(client, seed, admin_headers):
    user = seed.user()

    assert client.post(f"/user/{user.id}/cart", headers=admin_headers).status_code == 403
