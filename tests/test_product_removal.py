from storefront.db.models import Media, Product, ProductVariant, Review, Role


def test_removal_deletes_variants_media_rows_and_objects(client, seed, storage, admin_headers):
    product, _ = seed.product(variants=2, media_per_variant=1, storage=storage)
    keys = sorted(storage.objects)
    assert len(keys) == 2

    response = client.delete(f"/products/{product.id}", headers=admin_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Delete product"
    assert len(body["data"]["productVariants"]) == 2
    assert seed.count(Product) == 0
    assert seed.count(ProductVariant) == 0
    assert seed.count(Media) == 0
    assert storage.objects == set()
    assert sorted(storage.deleted) == keys


def test_failing_storage_delete_rolls_the_database_back(client, seed, storage, admin_headers):
    product, variants = seed.product(variants=2, media_per_variant=1, storage=storage)
    first = f"products/{product.id}/{variants[0].id}-0.jpg"
    second = f"products/{product.id}/{variants[1].id}-0.jpg"
    storage.fail_on.add(second)

    response = client.delete(f"/products/{product.id}", headers=admin_headers)

    assert response.status_code == 400
    assert response.json() == {"statusCode": 400, "message": "Failed to delete product", "error": "Bad Request"}
    assert seed.count(Product) == 1
    assert seed.count(ProductVariant) == 2
    assert seed.count(Media) == 2
    # The first object was already gone when the second delete failed.
    assert storage.deleted == [first]

    data = client.get(f"/products/{product.id}").json()["data"]
    assert len(data["productVariants"]) == 2


def test_product_without_variants_is_removed(client, seed, storage, admin_headers):
    product, _ = seed.product()

    assert client.delete(f"/products/{product.id}", headers=admin_headers).status_code == 200
    assert seed.count(Product) == 0
    assert storage.deleted == []


def test_removing_missing_product_is_not_found(client, admin_headers):
    response = client.delete("/products/404", headers=admin_headers)

    assert response.status_code == 404
    assert response.json()["message"] == "Product not found!"


def _review(client, seed, storage, keys):
    user = seed.user()
    product, variants = seed.product(variants=1)
    headers = seed.headers(Role.USER, user=user)
    payload = {
        "productId": product.id,
        "productVariantId": variants[0].id,
        "userId": user.id,
        "rating": 5,
        "comment": "Fits well",
        "mediaKeys": keys,
    }
    response = client.post("/reviews", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    storage.objects.update(keys)
    return response.json()["data"], headers


def test_review_media_keys_become_media_rows(client, seed, storage):
    review, _ = _review(client, seed, storage, ["reviews/a.jpg", "reviews/b.jpg"])

    assert [item["url"].rsplit("/", 2)[-2:] for item in review["media"]] == [
        ["reviews", "a.jpg"],
        ["reviews", "b.jpg"],
    ]
    assert seed.count(Media) == 2


def test_review_update_removes_selected_media(client, seed, storage):
    review, headers = _review(client, seed, storage, ["reviews/c.jpg", "reviews/d.jpg"])
    drop = review["media"][0]["id"]

    response = client.patch(
        f"/reviews/{review['id']}",
        json={"rating": 4, "mediaKeys": ["reviews/e.jpg"], "mediaIdsToDelete": [drop]},
        headers=headers,
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["rating"] == 4
    assert data["comment"] == "Fits well"
    assert sorted(item["url"].rsplit("/", 1)[-1] for item in data["media"]) == ["d.jpg", "e.jpg"]
    assert storage.deleted == ["reviews/c.jpg"]


def test_review_removal_deletes_its_objects(client, seed, storage):
    review, headers = _review(client, seed, storage, ["reviews/f.jpg"])

    response = client.delete(f"/reviews/{review['id']}", headers=headers)

    assert response.status_code == 200
    assert seed.count(Review) == 0
    assert seed.count(Media) == 0
    assert storage.deleted == ["reviews/f.jpg"]


def test_product_removal_takes_review_media_along(client, seed, storage, admin_headers):
    review, _ = _review(client, seed, storage, ["reviews/g.jpg", "reviews/h.jpg"])

    response = client.delete(f"/products/{review['productId']}", headers=admin_headers)

    assert response.status_code == 200
    assert seed.count(Review) == 0
    assert seed.count(Media) == 0
    assert sorted(storage.deleted) == ["reviews/g.jpg", "reviews/h.jpg"]
    assert storage.objects == set()
