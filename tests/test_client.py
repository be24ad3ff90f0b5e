import pytest
import requests

from weblog.client import ApiError, ConnectionRefused, WeblogClient


class FakeResponse:
    def __init__(self, status_code, body=None):
        self.status_code = status_code
        self._body = body
        self.content = b"" if body is None else b"{}"

    def json(self):
        if self._body is None:
            raise ValueError("no body")
        return self._body


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append((method, url, kwargs))
        if self.error:
            raise self.error
        return self.response


def test_connection_failure_is_reported_as_refused():
    session = FakeSession(error=requests.ConnectionError("nobody home"))
    api = WeblogClient("http://localhost:8000", session=session)
    with pytest.raises(ConnectionRefused) as excinfo:
        api.list_posts()
    assert "Connection refused" in str(excinfo.value)


def test_server_error_message_is_surfaced():
    session = FakeSession(FakeResponse(403, {"message": "Not authorized to delete this post"}))
    api = WeblogClient("http://localhost:8000", token="abc", session=session)
    with pytest.raises(ApiError) as excinfo:
        api.delete_post(1)
    assert excinfo.value.status_code == 403
    assert str(excinfo.value) == "Not authorized to delete this post"
    method, url, kwargs = session.calls[0]
    assert (method, url) == ("DELETE", "http://localhost:8000/api/posts/1")
    assert kwargs["headers"]["Authorization"] == "Bearer abc"


def test_field_errors_are_surfaced():
    session = FakeSession(FakeResponse(400, {"errors": [{"field": "title", "message": "Title too short"}]}))
    api = WeblogClient("http://localhost:8000", session=session)
    with pytest.raises(ApiError, match="Title too short"):
        api.create_post("Hey", "0123456789", 1)


def test_unauthorized_without_body():
    api = WeblogClient("http://localhost:8000", session=FakeSession(FakeResponse(401)))
    with pytest.raises(ApiError, match="Please log in"):
        api.profile()


def test_login_keeps_token():
    session = FakeSession(FakeResponse(200, {"user": {"id": 1}, "token": "tok"}))
    api = WeblogClient("http://localhost:8000/", session=session)
    api.login("alice@x.com", "secret1")
    assert api.token == "tok"
    assert session.calls[0][1] == "http://localhost:8000/api/auth/login"


def test_image_url_resolution():
    api = WeblogClient("https://api.weblog.test", session=FakeSession())
    assert api.image_url("/uploads/a.png") == "https://api.weblog.test/uploads/a.png"
    assert api.image_url("https://res.cloudinary.com/x.png") == "https://res.cloudinary.com/x.png"
