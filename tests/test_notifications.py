import pytest


@pytest.fixture
def commented(client, alice, bob, make_post):
    """Bob comments twice on Alice's post; returns Alice's notifications."""
    _, alice_headers = alice
    _, bob_headers = bob
    post = make_post(alice_headers)
    client.post(f"/api/comments/posts/{post['id']}", json={"content": "one"}, headers=bob_headers)
    client.post(f"/api/comments/posts/{post['id']}", json={"content": "two"}, headers=bob_headers)
    return post, client.get("/api/notifications", headers=alice_headers).json()


def test_notifications_are_listed_newest_first_with_sender_and_post(commented, bob):
    post, notifications = commented
    assert len(notifications) == 2
    assert notifications[0]["id"] > notifications[1]["id"]
    assert notifications[0]["sender"] == {"id": bob[0]["id"], "username": "bob"}
    assert notifications[0]["post"] == {"id": post["id"], "title": "Hello World!!"}


def test_notifications_require_authentication(client):
    assert client.get("/api/notifications").status_code == 401
    assert client.get("/api/notifications/unread-count").status_code == 401


def test_sender_has_no_notifications(client, commented, bob):
    _, bob_headers = bob
    assert client.get("/api/notifications", headers=bob_headers).json() == []


def test_unread_count_and_mark_read(client, commented, alice):
    _, headers = alice
    _, notifications = commented
    assert client.get("/api/notifications/unread-count", headers=headers).json() == {"count": 2}

    response = client.put(f"/api/notifications/{notifications[0]['id']}", headers=headers)
    assert response.status_code == 200
    assert response.json()["is_read"] is True
    assert client.get("/api/notifications/unread-count", headers=headers).json() == {"count": 1}


def test_marking_read_twice_is_harmless(client, commented, alice):
    _, headers = alice
    _, notifications = commented
    target = notifications[0]["id"]

    assert client.put(f"/api/notifications/{target}", headers=headers).json()["is_read"] is True
    response = client.put(f"/api/notifications/{target}", headers=headers)
    assert response.status_code == 200
    assert response.json()["is_read"] is True


def test_mark_read_of_someone_elses_notification_is_not_found(client, commented, bob):
    _, bob_headers = bob
    _, notifications = commented
    response = client.put(f"/api/notifications/{notifications[0]['id']}", headers=bob_headers)
    assert response.status_code == 404


def test_mark_read_missing_notification(client, alice):
    _, headers = alice
    assert client.put("/api/notifications/4242", headers=headers).status_code == 404


def test_only_recipient_can_delete(client, commented, alice, bob):
    _, alice_headers = alice
    _, bob_headers = bob
    _, notifications = commented
    target = notifications[0]["id"]

    response = client.delete(f"/api/notifications/{target}", headers=bob_headers)
    assert response.status_code == 403

    response = client.delete(f"/api/notifications/{target}", headers=alice_headers)
    assert response.status_code == 200
    assert response.json() == {"message": "Notification deleted successfully"}
    assert len(client.get("/api/notifications", headers=alice_headers).json()) == 1

    assert client.delete(f"/api/notifications/{target}", headers=alice_headers).status_code == 404


def test_out_of_range_notification_id_is_rejected(client, alice):
    _, headers = alice
    assert client.put("/api/notifications/99999999999999999999", headers=headers).status_code == 400
    assert client.delete("/api/notifications/99999999999999999999", headers=headers).status_code == 400
