from weblog.db.models import Post
from weblog.services.media import absolute_media_url

PNG = ("pic.png", b"\x89PNG\r\n\x1a\nfake-image-bytes", "image/png")


def test_post_image_is_uploaded_and_url_persisted(client, alice, make_post, cloudinary_store, db):
    _, headers = alice
    post = make_post(headers, files={"image": PNG})

    assert len(cloudinary_store.uploads) == 1
    assert post["image_url"].startswith("https://res.cloudinary.com/")
    assert db.get(Post, post["id"]).image_public_id == cloudinary_store.uploads[0]


def test_non_image_upload_is_rejected(client, alice, category_id, cloudinary_store):
    _, headers = alice
    response = client.post(
        "/api/posts",
        data={"title": "Hello World!!", "content": "0123456789", "category": str(category_id)},
        files={"image": ("notes.txt", b"plain text", "text/plain")},
        headers=headers,
    )
    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "image"
    assert cloudinary_store.uploads == []


def test_oversized_image_is_rejected(client, alice, category_id, cloudinary_store):
    _, headers = alice
    big = b"0" * (5 * 1024 * 1024 + 1)
    response = client.post(
        "/api/posts",
        data={"title": "Hello World!!", "content": "0123456789", "category": str(category_id)},
        files={"image": ("big.png", big, "image/png")},
        headers=headers,
    )
    assert response.status_code == 400
    assert "too large" in response.json()["errors"][0]["message"]
    assert cloudinary_store.uploads == []


def test_image_at_size_limit_is_accepted(client, alice, category_id, cloudinary_store):
    _, headers = alice
    exact = b"0" * (5 * 1024 * 1024)
    response = client.post(
        "/api/posts",
        data={"title": "Hello World!!", "content": "0123456789", "category": str(category_id)},
        files={"image": ("exact.png", exact, "image/png")},
        headers=headers,
    )
    assert response.status_code == 201
    assert len(cloudinary_store.uploads) == 1
    assert response.json()["image_url"] is not None


def test_replacing_image_destroys_previous_one(client, alice, make_post, cloudinary_store):
    _, headers = alice
    post = make_post(headers, files={"image": PNG})
    old_id = cloudinary_store.uploads[0]

    response = client.put(f"/api/posts/{post['id']}", files={"image": PNG}, headers=headers)
    assert response.status_code == 200
    assert response.json()["image_url"] != post["image_url"]
    assert cloudinary_store.destroyed == [old_id]


def test_failed_cleanup_does_not_fail_update(client, alice, make_post, cloudinary_store):
    _, headers = alice
    post = make_post(headers, files={"image": PNG})
    cloudinary_store.fail_destroy = True

    response = client.put(f"/api/posts/{post['id']}", files={"image": PNG}, headers=headers)
    assert response.status_code == 200
    assert cloudinary_store.destroyed == []


def test_delete_image_flag_clears_image(client, alice, make_post, cloudinary_store):
    _, headers = alice
    post = make_post(headers, files={"image": PNG})

    response = client.put(f"/api/posts/{post['id']}", data={"delete_image": "true"}, headers=headers)
    assert response.status_code == 200
    assert response.json()["image_url"] is None
    assert cloudinary_store.destroyed == cloudinary_store.uploads


def test_deleting_post_destroys_its_image(client, alice, make_post, cloudinary_store):
    _, headers = alice
    post = make_post(headers, files={"image": PNG})

    assert client.delete(f"/api/posts/{post['id']}", headers=headers).status_code == 204
    assert cloudinary_store.destroyed == cloudinary_store.uploads


def test_relative_image_paths_are_joined_with_base_url(client, alice, make_post, db):
    _, headers = alice
    post = make_post(headers)
    stored = db.get(Post, post["id"])
    stored.image_url = "/uploads/image-123.png"
    db.commit()

    response = client.get(f"/api/posts/{post['id']}")
    assert response.json()["image_url"] == "https://media.weblog.test/uploads/image-123.png"


def test_absolute_media_url():
    assert absolute_media_url("https://cdn.example.org/a.png", "https://api.test") == "https://cdn.example.org/a.png"
    assert absolute_media_url("http://cdn.example.org/a.png", "https://api.test") == "http://cdn.example.org/a.png"
    assert absolute_media_url("/uploads/a.png", "https://api.test/") == "https://api.test/uploads/a.png"
    assert absolute_media_url("uploads/a.png", "https://api.test") == "https://api.test/uploads/a.png"
    assert absolute_media_url(None, "https://api.test") is None
