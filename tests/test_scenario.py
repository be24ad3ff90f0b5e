def test_alice_and_bob(client, category_id):
    response = client.post(
        "/api/auth/register",
        json={"username": "alice", "email": "alice@x.com", "password": "secret1"},
    )
    assert response.status_code == 201
    alice = response.json()
    alice_headers = {"Authorization": f"Bearer {alice['token']}"}

    response = client.post(
        "/api/posts",
        data={"title": "Hello World!!", "content": "0123456789", "category": str(category_id)},
        headers=alice_headers,
    )
    assert response.status_code == 201
    post = response.json()
    assert post["user_id"] == alice["user"]["id"]

    bob = client.post(
        "/api/auth/register",
        json={"username": "bob", "email": "bob@x.com", "password": "secret2"},
    ).json()
    bob_headers = {"Authorization": f"Bearer {bob['token']}"}

    response = client.post(f"/api/comments/posts/{post['id']}", json={"content": "Welcome!"}, headers=bob_headers)
    assert response.status_code == 201

    notifications = client.get("/api/notifications", headers=alice_headers).json()
    assert len(notifications) == 1
    assert notifications[0]["sender"]["username"] == "bob"

    assert client.delete(f"/api/posts/{post['id']}", headers=bob_headers).status_code == 403
    assert client.delete(f"/api/posts/{post['id']}", headers=alice_headers).status_code == 204
