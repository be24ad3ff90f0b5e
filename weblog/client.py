"""HTTP client for the Weblog API.

Wraps ``requests`` with bearer-token handling and turns failures into two
exception types: ``ConnectionRefused`` when no response came back at all, and
``ApiError`` when the server answered with an error body.
"""
from typing import Optional

import requests

from weblog.services.media import absolute_media_url

DEFAULT_TIMEOUT = 10


class ClientError(Exception):
    pass


class ConnectionRefused(ClientError):
    def __init__(self, message: str = "Connection refused. Check API connection."):
        super().__init__(message)


class ApiError(ClientError):
    def __init__(self, status_code: int, message: str, body=None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        if body.get("message"):
            return body["message"]
        errors = body.get("errors")
        if errors:
            first = errors[0]
            return first.get("message") if isinstance(first, dict) else str(first)
    if response.status_code == 401:
        return "Unauthorized: Please log in."
    return f"Request failed with status code {response.status_code}"


class WeblogClient:
    def __init__(self, base_url: str, token: Optional[str] = None, session: Optional[requests.Session] = None,
                 timeout: float = DEFAULT_TIMEOUT):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, method: str, path: str, **kwargs):
        headers = kwargs.pop("headers", {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        try:
            response = self.session.request(
                method, f"{self.base_url}/api{path}", headers=headers, timeout=self.timeout, **kwargs
            )
        except (requests.ConnectionError, requests.Timeout):
            raise ConnectionRefused()

        if response.status_code >= 400:
            try:
                body = response.json()
            except ValueError:
                body = None
            raise ApiError(response.status_code, _error_message(response), body)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    def image_url(self, url: Optional[str]) -> Optional[str]:
        return absolute_media_url(url, self.base_url)

    # auth

    def register(self, username: str, email: str, password: str) -> dict:
        data = self._request("POST", "/auth/register", json={"username": username, "email": email, "password": password})
        self.token = data["token"]
        return data

    def login(self, email: str, password: str) -> dict:
        data = self._request("POST", "/auth/login", json={"email": email, "password": password})
        self.token = data["token"]
        return data

    # posts

    def list_posts(self, category: Optional[int] = None) -> list:
        params = {"category": category} if category is not None else None
        return self._request("GET", "/posts", params=params)

    def get_post(self, post_id: int) -> dict:
        return self._request("GET", f"/posts/{post_id}")

    def create_post(self, title: str, content: str, category: int, image=None) -> dict:
        files = {"image": image} if image is not None else None
        return self._request("POST", "/posts", data={"title": title, "content": content, "category": category}, files=files)

    def update_post(self, post_id: int, image=None, **fields) -> dict:
        files = {"image": image} if image is not None else None
        return self._request("PUT", f"/posts/{post_id}", data=fields, files=files)

    def delete_post(self, post_id: int):
        return self._request("DELETE", f"/posts/{post_id}")

    def list_categories(self) -> list:
        return self._request("GET", "/categories")

    # comments

    def list_comments(self, post_id: int) -> list:
        return self._request("GET", f"/comments/posts/{post_id}")

    def create_comment(self, post_id: int, content: str) -> dict:
        return self._request("POST", f"/comments/posts/{post_id}", json={"content": content})

    def update_comment(self, comment_id: int, content: str) -> dict:
        return self._request("PUT", f"/comments/{comment_id}", json={"content": content})

    def delete_comment(self, comment_id: int) -> dict:
        return self._request("DELETE", f"/comments/{comment_id}")

    # notifications

    def notifications(self) -> list:
        return self._request("GET", "/notifications")

    def unread_count(self) -> int:
        return self._request("GET", "/notifications/unread-count")["count"]

    def mark_read(self, notification_id: int) -> dict:
        return self._request("PUT", f"/notifications/{notification_id}")

    def delete_notification(self, notification_id: int) -> dict:
        return self._request("DELETE", f"/notifications/{notification_id}")

    # profiles

    def profile(self) -> dict:
        return self._request("GET", "/users/profile")

    def update_profile(self, profile_picture=None, **fields) -> dict:
        files = {"profilePicture": profile_picture} if profile_picture is not None else None
        return self._request("PUT", "/users/profile", data=fields, files=files)

    def public_profile(self, user_id: int) -> dict:
        return self._request("GET", f"/users/public-profile/{user_id}")
